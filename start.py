#!/usr/bin/env python3
"""
Startup script for the Kisan Scheme Matcher
"""
import subprocess
import sys
from pathlib import Path

ENV_TEMPLATE = """# MongoDB Configuration
MONGODB_URL=mongodb://localhost:27017
MONGODB_DB_NAME=bpfis
PROFILES_COLLECTION=farmer_scheme_profiles

# Ruleset Configuration
DATASET_PATH=Government_Scheme_Applicability_Dataset.xlsx

# Application Configuration
APP_NAME=Kisan Scheme Matcher
APP_VERSION=1.0.0
DEBUG=true
LOG_LEVEL=INFO

# API Configuration
API_PREFIX=/api
CORS_ORIGINS=http://localhost:3000,http://localhost:8080
"""


def create_env_file():
    """Create .env file if it doesn't exist"""
    env_path = Path(".env")
    if not env_path.exists():
        print("📝 Creating .env file...")
        env_path.write_text(ENV_TEMPLATE, encoding="utf-8")
        print("✅ .env file created successfully!")
    else:
        print("✅ .env file already exists")


def check_dependencies():
    """Check if required dependencies are installed"""
    print("🔍 Checking dependencies...")

    try:
        import fastapi
        import uvicorn
        import motor
        import openpyxl
        import pydantic_settings
        print("✅ All Python dependencies are installed")
        return True
    except ImportError as e:
        print(f"❌ Missing dependency: {e}")
        print("📦 Please install dependencies using: pip install -e .[test]")
        return False


def check_dataset():
    """Check that the scheme ruleset workbook is in place"""
    from kisan_schemes.config import settings
    from kisan_schemes.exceptions import DatasetConfigurationError
    from kisan_schemes.services.dataset_service import DatasetService

    print(f"📊 Checking scheme dataset at {settings.dataset_path}...")
    try:
        headers = DatasetService(settings.dataset_path).get_headers()
    except DatasetConfigurationError as e:
        print(f"❌ {e}")
        return False

    print(f"✅ Dataset has {len(headers)} columns")
    return True


def start_mongodb():
    """Start MongoDB in a Docker container"""
    print("🐳 Starting MongoDB...")

    try:
        result = subprocess.run(['docker', '--version'], capture_output=True, text=True)
        if result.returncode != 0:
            print("❌ Docker is not running. Please start Docker first.")
            return False

        result = subprocess.run(
            ['docker', 'run', '-d', '--rm', '--name', 'kisan-mongo', '-p', '27017:27017', 'mongo:7'],
            capture_output=True,
            text=True
        )
        if result.returncode == 0:
            print("✅ MongoDB started successfully")
            return True
        else:
            print(f"❌ Failed to start MongoDB: {result.stderr}")
            return False

    except FileNotFoundError:
        print("❌ Docker not found. Please install Docker.")
        return False


def run_tests():
    """Run the test suite"""
    print("🧪 Running tests...")

    result = subprocess.run([sys.executable, '-m', 'pytest', '-q'], capture_output=True, text=True)
    if result.returncode == 0:
        print("✅ Tests passed successfully")
        return True
    print(f"❌ Tests failed:\n{result.stdout}{result.stderr}")
    return False


def start_application():
    """Start the FastAPI application"""
    print("🚀 Starting the application...")

    try:
        subprocess.run([
            sys.executable, '-m', 'uvicorn',
            'kisan_schemes.main:app',
            '--host', '0.0.0.0',
            '--port', '8000',
            '--reload'
        ])
    except KeyboardInterrupt:
        print("\n👋 Application stopped by user")


def main():
    """Main startup function"""
    print("🌾 Kisan Scheme Matcher")
    print("=" * 50)

    if not Path("kisan_schemes").exists():
        print("❌ Please run this script from the repository root")
        sys.exit(1)

    create_env_file()

    if not check_dependencies():
        sys.exit(1)

    if not check_dataset():
        print("\n⚠️  Searches will fail until the dataset workbook is available.")

    if not start_mongodb():
        print("\n⚠️  MongoDB startup failed. Searches still work; saving profiles will not")
        print("   unless MongoDB is running elsewhere.")

    if not run_tests():
        print("\n⚠️  Some tests failed. The application may not work correctly.")

    print("\n📚 Next steps:")
    print("1. Visit http://localhost:8000/docs for API documentation")
    print("2. GET /api/schemes/headers to build the questionnaire")
    print("3. POST /api/schemes/search with the farmer's answers")

    response = input("\n🚀 Start the application now? (y/n): ").lower().strip()
    if response in ['y', 'yes']:
        start_application()
    else:
        print("\n💡 To start the application later, run:")
        print("   uvicorn kisan_schemes.main:app --reload")


if __name__ == "__main__":
    main()
