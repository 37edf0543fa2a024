# app.py
import logging
from datetime import timedelta

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from config import load_settings
from routes.interview_routes import interview_bp
from scheduling.book import InterviewBook
from scheduling.store import JsonFileBackend, RecordStore


def create_app(backend=None, slot_minutes=None) -> Flask:
    load_dotenv()  # loads from .env
    settings = load_settings()
    logging.basicConfig(level=settings.log_level.upper())

    if backend is None:
        backend = JsonFileBackend(settings.store_dir)
    minutes = slot_minutes if slot_minutes is not None else settings.slot_minutes

    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes
    app.extensions["interview_book"] = InterviewBook(
        RecordStore(backend),
        slot_duration=timedelta(minutes=minutes),
    )
    app.register_blueprint(interview_bp)
    return app


if __name__ == '__main__':
    create_app().run(debug=True)
