import logging
import random
from datetime import datetime, timedelta
import click
from flask import Flask, jsonify
from flask_cors import CORS
from .extensions import db, migrate
from .config import Config
from .blueprints.tables import bp as tables_bp
from .blueprints.bookings import bp as bookings_bp
from .service import get_service
from .workflow import SessionContext

def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    CORS(app, supports_credentials=True)

    db.init_app(app)
    migrate.init_app(app, db)

    with app.app_context():
        from . import models

    app.register_blueprint(tables_bp, url_prefix="/api/tables")
    app.register_blueprint(bookings_bp, url_prefix="/api/bookings")

    @app.get("/health")
    def health():
        return jsonify(status="ok")

    @app.cli.command("init-tables")
    def init_tables_command():
        """Stores the default table layout if none is stored yet."""
        tables = get_service().list_tables()
        click.echo(f"{len(tables)} tables ready.")

    @app.cli.command("seed")
    @click.option("--count", default=20, show_default=True, help="Bookings to attempt.")
    def seed_command(count):
        """Replaces all bookings with sample ones over the next three days."""
        service = get_service()
        service.bookings.clear()
        click.echo("Cleared existing bookings.")

        today = datetime.now().date()
        created = 0
        for i in range(count):
            day = today + timedelta(days=random.randint(1, 3))
            result = service.submit_booking(
                {
                    "name": f"Guest {i + 1}",
                    "email": f"guest{i + 1}@example.com",
                    "phone": f"555-123-{1000 + i}",
                    "date": day.isoformat(),
                    "time": f"{random.randint(12, 21)}:{random.choice(['00', '30'])}",
                    "guests": random.randint(1, 8),
                },
                SessionContext(),
            )
            if result.ok:
                created += 1
        click.echo(f"Created {created} bookings.")

    return app
