#!/usr/bin/env python3
"""
EcoTrip Planner - Main Entry Point

Runs the Flask web application.

Usage:
    python main.py
"""

import argparse
import logging

from config import settings


def main():
    parser = argparse.ArgumentParser(description="EcoTrip Planner")

    # Web app specific arguments
    parser.add_argument("--host", default="0.0.0.0", help="Web app host")
    parser.add_argument("--port", type=int, default=5000, help="Web app port")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    parser.add_argument("--database-url", default=None, help="Override ECOTRIP_DATABASE_URL")

    args = parser.parse_args()

    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)

    from webapp.app import create_app
    config = {'DATABASE_URL': args.database_url} if args.database_url else None
    app = create_app(config)
    print("🚀 Starting EcoTrip Planner Web App...")
    print(f"📍 Server running at: http://{args.host}:{args.port}")
    print(f"🔧 Debug mode: {'ON' if args.debug else 'OFF'}")
    app.run(host=args.host, port=args.port, debug=args.debug)

if __name__ == "__main__":
    main()
