# Dot Shared Feedback Client
# HTTP client for the Dot Feedback API

import logging

import httpx

from .config import FEEDBACK_API_URL

logger = logging.getLogger(__name__)


def _get_headers():
    """Get standard JSON headers"""
    return {
        'Accept': 'application/json',
        'Content-Type': 'application/json'
    }


def _parse_body(response):
    """JSON body, or the raw text as an error if the response isn't JSON"""
    try:
        return response.json()
    except ValueError:
        logger.error(f"Non-JSON response ({response.status_code}) from {response.request.url}")
        return {'error': response.text}


def _get_client(http_client):
    if http_client is not None:
        return http_client
    return httpx.Client(base_url=FEEDBACK_API_URL, timeout=10.0)


def submit_feedback(payload, http_client=None):
    """Submit one client's feedback for a project.

    Returns (status_code, body). status_code is None if the
    service could not be reached.
    """
    client = _get_client(http_client)

    try:
        response = client.post('/api/feedback', headers=_get_headers(), json=payload)
        if response.status_code == 409:
            logger.warning(f"Duplicate feedback: {payload.get('client_name')} / {payload.get('project')}")
        return response.status_code, _parse_body(response)

    except httpx.HTTPError as e:
        logger.error(f"Error submitting feedback: {e}")
        return None, {'error': 'Feedback service unavailable', 'details': str(e)}

    finally:
        if http_client is None:
            client.close()


def get_monthly_stats(month, http_client=None):
    """Get the monthly stats report for a 'YYYY-MM' month.

    Returns (status_code, body). status_code is None if the
    service could not be reached.
    """
    client = _get_client(http_client)

    try:
        response = client.get('/api/stats', headers=_get_headers(), params={'month': str(month)})
        return response.status_code, _parse_body(response)

    except httpx.HTTPError as e:
        logger.error(f"Error getting stats for {month}: {e}")
        return None, {'error': 'Feedback service unavailable', 'details': str(e)}

    finally:
        if http_client is None:
            client.close()
