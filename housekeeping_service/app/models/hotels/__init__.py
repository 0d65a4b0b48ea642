from .hotels import Hotel
from .rooms import Room
from .bookings import Booking
