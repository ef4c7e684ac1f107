"""
Development server runner
Run with: python run.py
"""

import uvicorn

from petsitter.config import ENVIRONMENT, PORT

if __name__ == "__main__":
    uvicorn.run("petsitter.main:app", host="0.0.0.0", port=PORT, reload=ENVIRONMENT == "development")
