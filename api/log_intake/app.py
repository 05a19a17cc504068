"""
Main API handler for the log intake service
"""

import os
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from mangum import Mangum

from log_intake.handlers.health import get_health_status
from log_intake.models.requests import IntakeRequest
from log_intake.models.responses import internal_error_response
from log_intake.services.intake import IntakeService
from log_intake.services.queue import SQSQueuePublisher
from log_intake.utils.logger import setup_logging

# Set up logging
logger = setup_logging()

app = FastAPI(
    title="Multi-Tenant Log Intake API",
    description="Accepts log submissions and queues them for asynchronous redaction and storage",
    version="1.0.0",
    docs_url="/api/v1/docs",
    redoc_url="/api/v1/redoc"
)

# Created on first request so a missing QUEUE_URL surfaces at first use
_queue_publisher = None


def get_queue_publisher() -> SQSQueuePublisher:
    """Shared SQS publisher, reused across warm invocations"""
    global _queue_publisher
    if _queue_publisher is None:
        _queue_publisher = SQSQueuePublisher(
            queue_url=os.environ.get('QUEUE_URL'),
            region=os.environ.get('AWS_REGION', 'us-east-1')
        )
        logger.info(f"Initialized SQS publisher for queue: {_queue_publisher.queue_url}")
    return _queue_publisher


def get_intake_service(publisher: SQSQueuePublisher = Depends(get_queue_publisher)) -> IntakeService:
    return IntakeService(publisher)


@app.get("/api/v1/health")
def health_check(publisher: SQSQueuePublisher = Depends(get_queue_publisher)):
    """Health check endpoint - reports queue reachability"""
    return get_health_status(publisher)


@app.post("/api/v1/ingest")
async def ingest_log(request: Request, service: IntakeService = Depends(get_intake_service)):
    """
    Accept one log entry as application/json or text/plain and queue it.

    JSON bodies carry tenant_id, text and an optional log_id. Plain text
    bodies identify the tenant through the X-Tenant-ID header.
    """
    submission = IntakeRequest(
        content_type=request.headers.get('content-type', ''),
        tenant_header=request.headers.get('x-tenant-id'),
        body=await request.body()
    )
    # submit makes blocking boto3 calls, keep them off the event loop
    result = await run_in_threadpool(service.submit, submission)
    return JSONResponse(status_code=result.status_code, content=result.body)


# Lambda handler using Mangum
def lambda_handler(event: Dict[str, Any], context) -> Dict[str, Any]:
    """
    AWS Lambda handler using Mangum to adapt FastAPI to Lambda

    Args:
        event: API Gateway event
        context: Lambda context

    Returns:
        API Gateway response
    """
    handler = Mangum(app, lifespan="off")

    try:
        logger.info(f"Processing request: {event.get('httpMethod', 'unknown')} {event.get('path', 'unknown')}")
        return handler(event, context)
    except Exception as e:
        logger.error(f"Unhandled error in Lambda handler: {str(e)}", exc_info=True)
        return internal_error_response()


# For local testing with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
