"""Request logging middleware (loguru)."""

import time

from fastapi.responses import Response
from loguru import logger

from conduit.router import CallNext, Middleware, RequestContext


def _target(ctx: RequestContext) -> str:
    query = ctx.url.query
    return f"{ctx.url.path}?{query}" if query else ctx.url.path


def simple_logger() -> Middleware:
    """Log method and path, then status and duration."""

    async def middleware(ctx: RequestContext, call_next: CallNext) -> Response:
        start = time.perf_counter()
        logger.info(f"{ctx.request.method} {_target(ctx)}")

        response = await call_next()

        logger.info(f"  -> {response.status_code} ({(time.perf_counter() - start) * 1000:.2f}ms)")
        return response

    return middleware


def logging_middleware(log_requests: bool = True, log_responses: bool = True, log_bodies: bool = False, level: str = "DEBUG") -> Middleware:
    """Detailed request/response logging.

    Args:
        log_requests: Log method, url and route params
        log_responses: Log status and duration
        log_bodies: Also log request and response bodies (careful with large payloads)
        level: loguru level used for every record
    """

    async def middleware(ctx: RequestContext, call_next: CallNext) -> Response:
        start = time.perf_counter()

        if log_requests:
            request_data: dict = {"method": ctx.request.method, "url": _target(ctx), "params": ctx.params}
            if log_bodies:
                request_data["body"] = (await ctx.request.body()).decode("utf-8", errors="replace")
            logger.log(level, f"Request {request_data}")

        response = await call_next()

        if log_responses:
            response_data: dict = {"status": response.status_code, "duration": f"{(time.perf_counter() - start) * 1000:.2f}ms"}
            if log_bodies:
                body = getattr(response, "body", None)
                response_data["body"] = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else "<streamed>"
            logger.log(level, f"Response {response_data}")

        return response

    return middleware
