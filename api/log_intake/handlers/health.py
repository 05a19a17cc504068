"""
Health check handler for the intake API
"""

from datetime import datetime, timezone
from typing import Any, Dict

from log_common.errors import ConfigurationError
from log_intake.utils.logger import get_logger

logger = get_logger('health')

SERVICE_NAME = "log-intake-api"
SERVICE_VERSION = "1.0.0"


def get_health_status(publisher) -> Dict[str, Any]:
    """
    Get health status information including SQS queue reachability

    Args:
        publisher: Queue publisher whose queue is checked

    Returns:
        Dictionary containing health status
    """
    health_data = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "checks": {}
    }

    try:
        attributes = publisher.get_queue_attributes()
        health_data["checks"]["sqs"] = {
            "status": "healthy",
            "queue_url": publisher.queue_url,
            "approximate_messages": attributes.get("ApproximateNumberOfMessages")
        }
    except ConfigurationError as e:
        health_data["checks"]["sqs"] = {
            "status": "unhealthy",
            "error": str(e)
        }
        health_data["status"] = "unhealthy"
        logger.error(f"SQS health check failed: {str(e)}")
    except Exception as e:
        health_data["checks"]["sqs"] = {
            "status": "unhealthy",
            "error": str(e),
            "queue_url": publisher.queue_url
        }
        health_data["status"] = "degraded"
        logger.error(f"SQS health check failed: {str(e)}")

    return health_data
