#!/usr/bin/env python3
"""Development server runner for Causeway."""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv


def setup_environment():
    """Set up the development environment."""
    project_root = Path(__file__).parent

    env_file = project_root / '.env'
    if env_file.exists():
        load_dotenv(env_file)
        print(f"✓ Loaded environment from {env_file}")
    else:
        print(f"⚠️ No .env file found at {env_file}")

    # Set default Flask environment variables
    os.environ.setdefault('FLASK_APP', 'causeway:create_app')
    os.environ.setdefault('FLASK_ENV', 'development')
    os.environ.setdefault('FLASK_DEBUG', '1')
    # Local development runs over plain HTTP
    os.environ.setdefault('SESSION_COOKIE_SECURE', 'false')


def initialize_database(app):
    """Create missing tables when running without migrations."""
    from causeway.extensions import db

    with app.app_context():
        try:
            db.create_all()
            print("✓ Database tables ready")
        except Exception as e:
            print(f"❌ Failed to create database tables: {e}")
            return False
    return True


def run_development_server(app):
    """Run the Flask development server."""
    print("\n" + "="*60)
    print("🚀 Starting Causeway Development Server")
    print("="*60)
    print(f"Database: {app.config['SQLALCHEMY_DATABASE_URI']}")
    print(f"Storage backend: {app.config['STORAGE_BACKEND']}")
    print(f"Audit dispatch: {app.config['AUDIT_DISPATCH']}")
    print("\n📱 Access the application at:")
    print("   • http://localhost:5000/api/health")
    print("   • http://localhost:5000/en/about")
    print("\n🛠️ To create demo data, run in another terminal:")
    print("   flask seed demo")
    print("   flask user create --email you@example.com --password secret --role ADMIN")
    print("\n⏹️ Press Ctrl+C to stop the server")
    print("="*60)

    app.run(
        host='0.0.0.0',
        port=5000,
        debug=True,
        use_reloader=True
    )


def main():
    """Main function to set up and run the development server."""
    print("Causeway Content Platform - Development Setup")
    print("="*60)

    setup_environment()

    # Import after the environment is loaded so Config sees it
    from causeway import create_app
    app = create_app()

    if not initialize_database(app):
        print("\n❌ Database initialization failed.")
        sys.exit(1)

    try:
        run_development_server(app)
    except KeyboardInterrupt:
        print("\n\n🛑 Development server stopped by user")


if __name__ == "__main__":
    main()
