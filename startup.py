import logging
import os
import sys

import uvicorn

# Configure logging to stdout
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

# Add the src directory to Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
src_path = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)


def _log_environment() -> None:
    """Log the settings that most often break startup, without exposing secrets."""
    logger.info("Amrutam Doctor Portal startup")
    logger.info(f"Python version: {sys.version.split()[0]}")
    logger.info(f"  PORT: {os.environ.get('PORT', 'not set')}")
    logger.info(f"  APP_ENV: {os.environ.get('APP_ENV', 'not set')}")
    logger.info(f"  MONGO_URI: {'set' if os.environ.get('MONGO_URI') else 'not set'}")
    logger.info(f"  MONGO_DB_NAME: {os.environ.get('MONGO_DB_NAME', 'not set')}")
    secret = os.environ.get('SECURITY_SECRET_KEY')
    if secret:
        logger.info(f"  SECURITY_SECRET_KEY length: {len(secret)} chars{'' if len(secret) >= 32 else ' (must be >= 32)'}")
    else:
        logger.info("  SECURITY_SECRET_KEY: not set (using default)")


if __name__ == "__main__":
    _log_environment()
    try:
        from amrutam.core.config import get_settings
        settings = get_settings()
    except ValueError:
        logger.exception("Configuration validation failed")
        logger.error("Check that SECURITY_SECRET_KEY is >= 32 characters and MONGO_URI is a mongodb:// URI")
        sys.exit(1)

    port = int(os.environ.get("PORT", settings.port))
    host = os.environ.get("HOST", settings.host)
    logger.info(f"Starting uvicorn on {host}:{port} (env={settings.app_env}, debug={settings.debug})")
    try:
        uvicorn.run(
            "amrutam.app:app",
            host=host,
            port=port,
            reload=settings.is_development,
            log_level="info",
            access_log=True,
            timeout_keep_alive=75,
            timeout_graceful_shutdown=30,
        )
    except KeyboardInterrupt:
        logger.info("Shutting down due to keyboard interrupt")
