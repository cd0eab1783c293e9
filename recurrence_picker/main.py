"""
FastAPI application factory
"""
import logging
import traceback

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from recurrence_picker.config import get_settings
from recurrence_picker.api.v1 import recurrence

logging.basicConfig(level=get_settings().LOG_LEVEL.upper(), format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger(__name__)


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Catches ALL exceptions including sync routes"""

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            tb_str = traceback.format_exc()
            logger.error(f"\n{'='*60}\nERROR on {request.method} {request.url.path}\n{tb_str}{'='*60}")
            return Response(content=f"Internal Server Error: {exc}", status_code=500)


def create_app() -> FastAPI:
    """
    Application factory - создаёт и настраивает FastAPI приложение

    Returns:
        Настроенный FastAPI app
    """
    settings = get_settings()

    app = FastAPI(
        title="Recurring Date Picker",
        debug=settings.DEBUG,
    )

    app.add_middleware(ErrorLoggingMiddleware)

    app.include_router(recurrence.router)

    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    # Запуск на 127.0.0.1 (localhost) — открывать в браузере: http://127.0.0.1:8000/docs
    uvicorn.run(
        "recurrence_picker.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
