"""Deployment of the built application.

Only Vercel is implemented. Deployers are looked up by platform name so
new platforms plug into the same dispatch.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Callable

import httpx

from .errors import DeploymentError
from .logs import get_logger

logger = get_logger("deployer")

DEPLOY_TIMEOUT = 600
VERIFY_TIMEOUT = 10

_URL = re.compile(r"https://\S+")


def deploy_to_vercel(app_path: Path) -> str:
    """Deploy with the vercel CLI and return the production URL."""
    try:
        result = subprocess.run(
            ["vercel", "--prod", "--yes"],
            cwd=app_path,
            capture_output=True,
            text=True,
            timeout=DEPLOY_TIMEOUT,
        )
    except FileNotFoundError as e:
        raise DeploymentError("vercel CLI is not installed. Install: npm i -g vercel") from e
    except subprocess.TimeoutExpired as e:
        raise DeploymentError(f"Deployment timed out after {DEPLOY_TIMEOUT}s") from e

    if result.returncode != 0:
        raise DeploymentError(f"Vercel deployment failed: {result.stderr[:200]}")

    urls = _URL.findall(result.stdout)
    if not urls:
        raise DeploymentError("Vercel did not report a deployment URL")
    return urls[-1]


DEPLOYERS: dict[str, Callable[[Path], str]] = {
    "vercel": deploy_to_vercel,
}


def deploy(app_path: str | Path, platform: str) -> str:
    """Deploy to the named platform. Returns the deployment URL."""
    deployer = DEPLOYERS.get(platform)
    if deployer is None:
        raise DeploymentError(f"Unsupported platform: {platform}")
    logger.info("Deploying %s to %s", app_path, platform)
    return deployer(Path(app_path))


def verify_deployment(url: str, timeout: float = VERIFY_TIMEOUT) -> bool:
    """Check that a deployed URL answers."""
    try:
        resp = httpx.get(url, timeout=timeout, follow_redirects=True)
    except httpx.TransportError as e:
        logger.warning("Deployment at %s is not reachable: %s", url, e)
        return False
    return resp.status_code < 400
