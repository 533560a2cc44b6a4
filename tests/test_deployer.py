"""Tests for deployment."""

import subprocess
from unittest.mock import MagicMock, patch

import httpx
import pytest

from webify_cli.deployer import DEPLOYERS, deploy, verify_deployment
from webify_cli.errors import DeploymentError


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestDeploy:
    @patch("webify_cli.deployer.subprocess.run")
    def test_vercel_returns_last_url(self, mock_run, tmp_path):
        mock_run.return_value = completed(stdout=(
            "Inspect: https://vercel.com/me/app/abc123\n"
            "Production: https://my-tool-webapp.vercel.app\n"
        ))
        assert deploy(tmp_path, "vercel") == "https://my-tool-webapp.vercel.app"
        args, kwargs = mock_run.call_args
        assert args[0] == ["vercel", "--prod", "--yes"]
        assert kwargs["cwd"] == tmp_path

    @patch("webify_cli.deployer.subprocess.run")
    def test_vercel_failure(self, mock_run, tmp_path):
        mock_run.return_value = completed(returncode=1, stderr="Error: not authenticated")
        with pytest.raises(DeploymentError, match="not authenticated"):
            deploy(tmp_path, "vercel")

    @patch("webify_cli.deployer.subprocess.run")
    def test_vercel_without_url(self, mock_run, tmp_path):
        mock_run.return_value = completed(stdout="done\n")
        with pytest.raises(DeploymentError, match="did not report"):
            deploy(tmp_path, "vercel")

    @patch("webify_cli.deployer.subprocess.run", side_effect=FileNotFoundError("vercel"))
    def test_vercel_not_installed(self, mock_run, tmp_path):
        with pytest.raises(DeploymentError, match="not installed"):
            deploy(tmp_path, "vercel")

    def test_unsupported_platform(self, tmp_path):
        with pytest.raises(DeploymentError, match="Unsupported platform: netlify"):
            deploy(tmp_path, "netlify")

    def test_registered_platforms(self):
        assert list(DEPLOYERS) == ["vercel"]


class TestVerifyDeployment:
    @patch("httpx.get")
    def test_reachable(self, mock_get):
        mock_get.return_value = MagicMock(status_code=200)
        assert verify_deployment("https://example.vercel.app") is True

    @patch("httpx.get")
    def test_error_status(self, mock_get):
        mock_get.return_value = MagicMock(status_code=404)
        assert verify_deployment("https://example.vercel.app") is False

    @patch("httpx.get", side_effect=httpx.ConnectError("connection refused"))
    def test_unreachable(self, mock_get):
        assert verify_deployment("https://example.vercel.app") is False

    @patch("httpx.get", side_effect=httpx.TimeoutException("timed out"))
    def test_timeout(self, mock_get):
        assert verify_deployment("https://example.vercel.app") is False

    @pytest.mark.parametrize("error", [
        httpx.ReadError("connection reset by peer"),
        httpx.RemoteProtocolError("server disconnected without sending a response"),
    ])
    def test_transport_errors(self, error):
        with patch("httpx.get", side_effect=error):
            assert verify_deployment("https://example.vercel.app") is False
