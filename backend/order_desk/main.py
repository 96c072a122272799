import os

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from order_desk.api.routes import INTERNAL_LOOKUP_ERROR, router as lookup_router
from order_desk.api.escalation_routes import INTERNAL_ESCALATION_ERROR, router as escalation_router
from order_desk.config import load_cors_origins_from_env
from order_desk.log import setup_logging
from order_desk.tools.order_lookup import LookupInputError

load_dotenv()
setup_logging()

app = FastAPI(title="Voice Agent Order Lookup Middleware", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=load_cors_origins_from_env(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LookupInputError)
async def handle_lookup_input_error(request: Request, exc: LookupInputError):
    logger.info("Rejected {} input: {}", request.url.path, exc)
    return JSONResponse(status_code=400, content={"success": False, "error": str(exc)})


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    logger.info("Malformed body on {}: {}", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"success": False, "error": "Invalid request body."})


# Anything unhandled (bad env config, unexpected payload shapes) still answers in the envelope
@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.opt(exception=exc).error("Unhandled error on {}", request.url.path)
    message = INTERNAL_ESCALATION_ERROR if request.url.path == "/escalate" else INTERNAL_LOOKUP_ERROR
    return JSONResponse(status_code=500, content={"success": False, "error": message})


app.include_router(lookup_router)
app.include_router(escalation_router)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "3000")))
