"""
Sample Lambda Handler.

Invoked by API Gateway (HTTP API, payload format 2.0) for GET /sample after the
JWT authorizer has validated the caller's Cognito token. Returns a greeting
together with the identity taken from the token claims.
"""

import json
import logging
import os
from typing import Dict, Any, Optional

# Setup logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

ENVIRONMENT = os.environ.get('ENVIRONMENT', 'dev')


def get_jwt_claims(event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Extract JWT claims placed in the event by the API Gateway authorizer.

    Args:
        event: API Gateway HTTP API event (payload format 2.0)

    Returns:
        Claims dict, or None if the request carries no authorizer context
    """
    claims = (
        event.get('requestContext', {})
        .get('authorizer', {})
        .get('jwt', {})
        .get('claims')
    )
    return claims or None


def create_response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    """Build an HTTP API proxy response."""
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body),
    }


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for GET /sample.

    Args:
        event: API Gateway HTTP API event
        context: Lambda context

    Returns:
        HTTP API proxy response
    """
    request_id = event.get('requestContext', {}).get('requestId', 'unknown')
    logger.info(f"Handling {event.get('routeKey', 'unknown route')} (request {request_id}, env {ENVIRONMENT})")

    try:
        claims = get_jwt_claims(event)
        if claims is None:
            # The authorizer should have rejected this request already
            logger.warning(f"Request {request_id} reached the function without JWT claims")
            return create_response(401, {'message': 'Unauthorized'})

        user = {
            'sub': claims.get('sub'),
            'email': claims.get('email'),
        }
        logger.info(f"Authorized request from sub={user['sub']}")

        return create_response(200, {
            'message': 'Hello from /sample',
            'user': user,
        })

    except Exception as e:
        logger.error(f"Error handling request {request_id}: {str(e)}", exc_info=True)
        return create_response(500, {'message': 'Internal server error'})
