import logging
from contextlib import asynccontextmanager

import firebase_admin
import uvicorn
from fastapi import FastAPI
from firebase_admin import credentials, firestore as fs
from starlette.middleware.cors import CORSMiddleware

from config import CORS_ORIGINS, FIREBASE_CREDENTIALS, HOST, LOG_FILE, LOG_LEVEL, PORT
from context import RequestContextMiddleware
from exception_handlers import register_exception_handlers
from routes.posts import router as posts_router
from services.firestore import FirestoreDB
from utils.log import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(FIREBASE_CREDENTIALS)
    firebase_app = firebase_admin.initialize_app(cred)

    # Initialize dependencies
    firestore = FirestoreDB(fs.client(firebase_app))
    app.state.firestore = firestore
    logger.info("Firestore connected for project %s", firebase_app.project_id)

    yield
    # Cleanup resources
    firestore.close()
    firebase_admin.delete_app(firebase_app)
    logger.info("Firestore connection closed")


def create_app(use_lifespan: bool = True) -> FastAPI:
    setup_logging(LOG_LEVEL, LOG_FILE)

    app = FastAPI(
        title="Posts Service",
        description="Posts, likes and comments for the social feed",
        version="1.0.0",
        lifespan=lifespan if use_lifespan else None,
    )

    # middleware to set request context
    app.add_middleware(RequestContextMiddleware)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"]
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(posts_router, prefix="/posts", tags=["posts"])

    @app.get("/health")
    def health_check():
        return {"status": "healthy", "service": "posts"}

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
