"""Central Configuration for the Coaching System."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Base Directory (Root of the project)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load Environment Variables
load_dotenv(BASE_DIR / ".env")

# LLM Settings
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
GEMINI_MODEL_NAME = os.getenv("GEMINI_MODEL_NAME", "gemini-2.0-flash")

# Paths
PROFILE_STORAGE_PATH = Path(os.getenv("PROFILE_STORAGE_PATH", BASE_DIR / ".profiles"))
PROGRESS_STORAGE_PATH = Path(os.getenv("PROGRESS_STORAGE_PATH", BASE_DIR / ".progress"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
