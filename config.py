import os

from dotenv import load_dotenv

# Load .env file
load_dotenv()

# Firebase / Firestore
FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS", "./firebase.json")
POSTS_COLLECTION = os.getenv("POSTS_COLLECTION", "posts")
USERS_COLLECTION = os.getenv("USERS_COLLECTION", "users")

# HTTP
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE")
