from typing import Any, Mapping, Optional

import requests
import structlog

from hash_tickler.models.target import Target

DEFAULT_ORIGIN = "https://shallenge.onrender.com"
DEMO_ORIGIN = "http://127.0.0.1:8000"
DEFAULT_TIMEOUT = 30

log = structlog.get_logger()


class ChallengeServiceError(RuntimeError):
    pass


def challenges_url(origin: str) -> str:
    return f"{origin.rstrip('/')}/challenges"


def answer_url(origin: str, target: Target) -> str:
    return f"{challenges_url(origin)}/{target.id}/answer"


def _post(url: str, **kwargs) -> requests.Response:
    try:
        return requests.post(url, **kwargs)
    except requests.RequestException as e:
        raise ChallengeServiceError(f"Failed to reach {url}: {e}") from e


def generate(
    origin: str = DEFAULT_ORIGIN,
    *,
    params: Optional[Mapping[str, Any]] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Target:
    """Ask the challenge service for a new challenge."""
    url = challenges_url(origin)
    response = _post(url, params=params, timeout=timeout)
    if response.status_code != 201:
        raise ChallengeServiceError(
            f"could not generate challenge (status={response.status_code}): {response.text}"
        )

    try:
        target = Target.from_record(response.json())
    except ValueError as e:
        # requests' JSONDecodeError is a ValueError too.
        raise ChallengeServiceError(f"Malformed challenge from {url}: {e}") from e

    log.info("challenge generated", **target.describe())
    return target


def submit(target: Target, answer: str, origin: str = DEFAULT_ORIGIN, *, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Submit the answer to a challenge and return the service's flag."""
    url = answer_url(origin, target)
    response = _post(url, json=answer, timeout=timeout)
    if response.status_code != 200:
        raise ChallengeServiceError(
            f"could not validate challenge (status={response.status_code}): {response.text}"
        )

    try:
        flag = response.json()
    except ValueError:
        flag = response.text
    if not isinstance(flag, str):
        flag = response.text

    log.info("challenge answered", target_id=target.id, answer=answer)
    return flag
