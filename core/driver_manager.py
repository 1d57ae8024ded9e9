import logging
from typing import Callable, Optional

from appium import webdriver
from appium.options.common import AppiumOptions
from appium.webdriver.webdriver import WebDriver

from core.config import SessionSettings, normalize_platform
from core.retry import RetryConfig, create_retry_decorator
from exceptions import (
    DriverSessionError,
    create_error_context,
    log_error_with_context,
)


logger = logging.getLogger(__name__)


def build_options(capabilities: dict) -> AppiumOptions:
    options = AppiumOptions()
    for key, value in capabilities.items():
        # Booleans and numbers keep their JSON type
        if isinstance(value, (bool, int, float)):
            options.set_capability(key, value)
        else:
            options.set_capability(key, str(value))
    return options


class AppiumDriverManager:
    """Owns the Appium session for one test process.

    The driver is created lazily on first request and destroyed by quit().
    At most one live session exists per manager; fixtures inject the
    manager wherever a driver is needed.
    """

    def __init__(
        self,
        settings: SessionSettings,
        driver_factory: Optional[Callable[..., WebDriver]] = None,
        retry_config: Optional[RetryConfig] = None,
    ):
        self.settings = settings
        self._driver_factory = driver_factory or webdriver.Remote
        self._retry_config = retry_config or RetryConfig(max_attempts=settings.session_attempts)
        self._driver: Optional[WebDriver] = None

    @property
    def driver(self) -> Optional[WebDriver]:
        return self._driver

    def is_active(self) -> bool:
        return self._driver is not None

    def get_or_create_driver(self) -> WebDriver:
        if self._driver is None:
            self._driver = self._create_driver()
        return self._driver

    def _create_driver(self) -> WebDriver:
        # Unsupported platforms fail here, before any session attempt
        platform = normalize_platform(self.settings.platform_name)
        capabilities = self.settings.capabilities(platform)
        executor = self.settings.command_executor

        logger.info(f"Creating Appium driver for platform {platform} at {executor}")
        context = create_error_context(
            component="Driver Session",
            operation="create_session",
            platform=platform,
            server_url=executor,
        )

        open_session = create_retry_decorator(
            self._retry_config,
            operation=f"{platform} session creation",
            correlation_id=context.correlation_id,
        )(self._open_session)

        try:
            driver = open_session(executor, capabilities)
        except Exception as e:
            error = DriverSessionError(
                f"No se pudo crear el driver de Appium: {e}",
                platform=platform,
                server_url=executor,
                error_context=context,
                cause=e,
            )
            log_error_with_context(error, context)
            raise error from e

        try:
            driver.implicitly_wait(self.settings.implicit_wait)
        except Exception as e:
            # A session without timeouts is not handed out
            self._safe_quit(driver)
            raise DriverSessionError(
                f"Could not configure timeouts: {e}",
                platform=platform,
                server_url=executor,
                error_context=context,
                cause=e,
            ) from e

        logger.info(
            f"Appium driver created - implicit wait {self.settings.implicit_wait}s, "
            f"explicit wait {self.settings.explicit_wait}s"
        )
        return driver

    def _open_session(self, executor: str, capabilities: dict) -> WebDriver:
        return self._driver_factory(command_executor=executor, options=build_options(capabilities))

    def quit(self) -> None:
        # Idempotent; errors while closing are logged, the handle is always cleared
        if self._driver is None:
            return
        try:
            logger.info("Closing Appium driver")
            self._driver.quit()
        except Exception as e:
            logger.warning(f"Error closing Appium driver: {e}")
        finally:
            self._driver = None

    @staticmethod
    def _safe_quit(driver: WebDriver) -> None:
        try:
            driver.quit()
        except Exception as e:
            logger.warning(f"Error closing half-configured driver: {e}")
