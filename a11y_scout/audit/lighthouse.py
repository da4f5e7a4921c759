# File: a11y_scout/audit/lighthouse.py
"""
Lighthouse-аудит страниц через браузер под управлением Playwright.

Браузер запускается один раз на запуск (persistent context с remote-debugging
портом), чтобы Lighthouse подключался к нему и видел cookie, выставленные
после закрытия баннера согласия.
"""
from __future__ import annotations

import asyncio
import json
import socket
import tempfile
from typing import Any, Dict, List, Optional

from playwright.async_api import BrowserContext, Error as PlaywrightError, Playwright, async_playwright

from a11y_scout.config import AuditConfig
from a11y_scout.errors import AuditError, BrowserError
from a11y_scout.logger import logger

__all__ = ("LighthouseAuditor", "build_lighthouse_command", "parse_lighthouse_output")

_CONSENT_CLICK_TIMEOUT_MS = 5_000


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def build_lighthouse_command(config: AuditConfig, url: str, port: int) -> List[str]:
    """Аргументы Lighthouse CLI для аудита только категории accessibility."""
    return [
        *config.lighthouse_command,
        url,
        "--only-categories=accessibility",
        "--output=json",
        "--output-path=stdout",
        f"--port={port}",
        "--disable-storage-reset",
        "--quiet",
    ]


def parse_lighthouse_output(url: str, stdout: bytes) -> Dict[str, Any]:
    """Разбирает JSON-вывод Lighthouse; ошибка разбора превращается в AuditError."""
    try:
        data = json.loads(stdout.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise AuditError(url, f"invalid Lighthouse JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise AuditError(url, "Lighthouse output is not a JSON object")
    runtime_error = data.get("runtimeError")
    if isinstance(runtime_error, dict) and runtime_error.get("message"):
        raise AuditError(url, str(runtime_error["message"]))
    return data


class LighthouseAuditor:
    """Асинхронный контекстный менеджер: ``async with LighthouseAuditor(cfg) as audit``.

    Экземпляр вызываем: ``await audit(url)`` возвращает сырой результат Lighthouse.
    """

    def __init__(self, config: AuditConfig) -> None:
        self.config = config
        self.port: int = 0
        self._playwright: Optional[Playwright] = None
        self._context: Optional[BrowserContext] = None
        self._profile: Optional[tempfile.TemporaryDirectory] = None

    async def __aenter__(self) -> LighthouseAuditor:
        self.port = _free_port()
        self._profile = tempfile.TemporaryDirectory(prefix="a11y_scout-")
        try:
            self._playwright = await async_playwright().start()
            self._context = await self._playwright.chromium.launch_persistent_context(
                self._profile.name,
                headless=self.config.headless,
                args=[f"--remote-debugging-port={self.port}"],
                user_agent=self.config.user_agent,
            )
        except (PlaywrightError, OSError) as exc:
            await self._shutdown()
            raise BrowserError(str(exc)) from exc
        except BaseException:
            await self._shutdown()
            raise
        logger.debug("Chromium started, debugging port %d", self.port)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._shutdown()

    async def _shutdown(self) -> None:
        try:
            if self._context is not None:
                await self._context.close()
        finally:
            self._context = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
            if self._profile is not None:
                self._profile.cleanup()
                self._profile = None

    async def __call__(self, url: str) -> Dict[str, Any]:
        if self._context is None:
            raise RuntimeError("Browser not started")
        page = await self._context.new_page()
        try:
            try:
                await page.goto(url, timeout=self.config.navigation_timeout * 1000)
            except PlaywrightError as exc:
                raise AuditError(url, f"navigation failed: {exc}") from exc
            await self._dismiss_consent(page, url)
            return await self._run_lighthouse(url)
        finally:
            await page.close()

    async def _dismiss_consent(self, page, url: str) -> None:
        selector = self.config.consent_selector
        if not selector or url.endswith(".xml"):
            return
        try:
            await page.click(selector, timeout=_CONSENT_CLICK_TIMEOUT_MS)
        except PlaywrightError:
            logger.info("No consent banner found or failed to dismiss: %s", url)

    async def _run_lighthouse(self, url: str) -> Dict[str, Any]:
        cmd = build_lighthouse_command(self.config, url, self.port)
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise AuditError(url, f"cannot start {cmd[0]}: {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self.config.audit_timeout
            )
        except asyncio.TimeoutError as exc:
            proc.kill()
            await proc.wait()
            raise AuditError(url, f"Lighthouse timed out after {self.config.audit_timeout} s") from exc

        if proc.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise AuditError(url, f"Lighthouse exited with {proc.returncode}: {message[-500:]}")
        return parse_lighthouse_output(url, stdout)
