"""
Visit Status Automation Runner
Run this from cron or a scheduler: python run_status_automation.py
"""

import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from petsitter import models, models_messaging, models_transaction, models_visit  # noqa: F401
from petsitter.database import SessionLocal
from petsitter.services.status_automation import complete_elapsed_visits

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logger.info("🚀 Running visit status automation...")
    db = SessionLocal()
    try:
        summary = complete_elapsed_visits(db)
        logger.info(f"🏁 Done: {summary['total_updated']} visit(s) completed")
    except Exception as e:
        logger.error(f"❌ Status automation failed: {e}")
        sys.exit(1)
    finally:
        db.close()
