import json
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.responses import JSONResponse, Response
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

SKIPPED_PREFIXES = ("/openapi", "/docs", "/redoc")

SUCCESS_MESSAGES = {
    "GET": ("Data retrieved successfully", AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY),
    "POST": ("Created successfully", AppStatusCode.CREATED_SUCCESSFULLY),
    "PATCH": ("Updated successfully", AppStatusCode.UPDATED_SUCCESSFULLY),
    "PUT": ("Updated successfully", AppStatusCode.UPDATED_SUCCESSFULLY),
}


class JsonResponseMiddleware(BaseHTTPMiddleware):
    """Wrap plain JSON success bodies into the JsonOutResult envelope."""

    async def dispatch(self, request, call_next: Callable):
        if request.url.path.startswith(SKIPPED_PREFIXES):
            return await call_next(request)

        response = await call_next(request)

        # Only wrap successful JSON responses
        if not (200 <= response.status_code < 400 and "application/json" in response.headers.get("content-type", "")):
            return response

        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        headers = {k: v for k, v in response.headers.items()
                   if k.lower() != "content-length"}

        try:
            data = json.loads(body_bytes.decode("utf-8"))
        except ValueError:
            return Response(content=body_bytes, status_code=response.status_code,
                            headers=headers, media_type=response.media_type)

        # Already wrapped by success_response()
        if isinstance(data, dict) and {"status", "status_code", "message"}.issubset(data.keys()):
            return JSONResponse(content=data, status_code=response.status_code, headers=headers)

        message, status_code = SUCCESS_MESSAGES.get(
            request.method, SUCCESS_MESSAGES["GET"])
        wrapped = JsonOutResult(
            data=data,
            status="Success",
            status_code=status_code,
            message=message
        ).model_dump()

        return JSONResponse(
            content=wrapped,
            status_code=response.status_code,
            headers=headers
        )
