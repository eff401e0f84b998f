"""
Entry point for the User Records service
"""

import sys
import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file before settings are imported
load_dotenv()

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

from user_records.app import app
from user_records.config.settings import LOG_LEVEL, PORT

# Configure logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting User Records service on port {PORT}")
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=PORT)
