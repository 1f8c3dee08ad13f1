import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from paraphraser.api.middleware import install_server_guards
from paraphraser.api.routes import router
from paraphraser.config import CORS_ORIGINS, PORT
from paraphraser.logging_config import configure_logging
from paraphraser.validation import INVALID_TEXT, INVALID_TONE, QUICK_TEXT_NOT_STRING

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Humanizer Paraphrase Service",
    version="0.1.0",
)

# Middleware FIRST, CORS outermost
install_server_guards(app)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes AFTER middleware
app.include_router(router)


def validation_message(path: str, errors: list) -> str:
    """
    Pick the client-facing message for a body that failed schema parsing
    (bad JSON, non-object body, non-string fields).
    """
    if path == "/paraphrase":
        return QUICK_TEXT_NOT_STRING

    for err in errors:
        loc = err.get("loc") or ()
        if "text" in loc:
            return INVALID_TEXT
    for err in errors:
        loc = err.get("loc") or ()
        if "tone" in loc:
            return INVALID_TONE
    return INVALID_TEXT


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = validation_message(request.url.path, exc.errors())
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


def serve():
    import uvicorn

    uvicorn.run("paraphraser.main:app", host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    serve()
