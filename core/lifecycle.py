import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from appium.webdriver.webdriver import WebDriver

from core.driver_manager import AppiumDriverManager
from core.reporting import attach_screenshot, record_report_data
from exceptions import create_error_context, log_error_with_context


logger = logging.getLogger(__name__)

STATUS_PASSED = "EXITOSO"
STATUS_FAILED = "FALLIDO"


@dataclass
class StepFailure:
    step: str
    error_type: str
    message: str


class ScenarioLifecycle:
    """Driver setup/teardown and report entries around one scenario.

    start() opens (or reuses) the session; finish() reports the outcome and
    always quits the driver, once, whatever happened before it.
    """

    def __init__(
        self,
        driver_manager: AppiumDriverManager,
        reporter: Callable[[str, str], None] = record_report_data,
        screenshot_sink: Callable[[Optional[bytes], str], bool] = attach_screenshot,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.driver_manager = driver_manager
        self._reporter = reporter
        self._screenshot_sink = screenshot_sink
        self._clock = clock
        self.scenario_name: Optional[str] = None
        self.tags: List[str] = []
        self.failures: List[StepFailure] = []
        self.status: Optional[str] = None
        self._started_at: Optional[float] = None

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    @property
    def finished(self) -> bool:
        return self.status is not None

    def start(self, name: str, tags: Iterable[str] = ()) -> WebDriver:
        self.scenario_name = name
        self.tags = sorted(tags)
        self._started_at = self._clock()
        logger.info(f"=== Iniciando escenario: {name} ===")

        try:
            driver = self.driver_manager.get_or_create_driver()
        except Exception as e:
            context = create_error_context(
                component="Scenario Hooks",
                operation="before_scenario",
                scenario=name,
            )
            log_error_with_context(e, context)
            raise

        self._report(
            "Escenario Iniciado",
            f"Escenario: {name}\nTags: {', '.join(self.tags) or '-'}",
        )
        return driver

    def record_step_failure(self, step: str, exception: BaseException) -> None:
        # After-step hook: remember the failure, the scenario decides at finish()
        logger.warning(f"Paso fallido: {step} - {type(exception).__name__}: {exception}")
        self.failures.append(StepFailure(step, type(exception).__name__, str(exception)))

    def duration(self) -> str:
        if self._started_at is None:
            return "N/A"
        return f"{self._clock() - self._started_at:.2f}s"

    def finish(self) -> str:
        if self.finished:
            return self.status

        self.status = STATUS_FAILED if self.failed else STATUS_PASSED
        try:
            logger.info(f"=== Finalizando escenario: {self.scenario_name} - {self.status} ===")
            self._report(
                "Escenario Finalizado",
                f"Escenario: {self.scenario_name}\nEstado: {self.status}\nDuración: {self.duration()}",
            )
            if self.failed:
                details = "\n".join(
                    f"{failure.step}: {failure.error_type}: {failure.message}" for failure in self.failures
                )
                self._report("Error en Escenario", f"Escenario: {self.scenario_name}\n{details}")
                self._capture_screenshot()
        except Exception as e:
            logger.warning(f"Error reporting scenario {self.scenario_name}: {e}")
        finally:
            self.driver_manager.quit()

        return self.status

    def _capture_screenshot(self) -> None:
        driver = self.driver_manager.driver
        if driver is None:
            return
        try:
            self._screenshot_sink(driver.get_screenshot_as_png(), "Pantalla al fallar")
        except Exception as e:
            logger.warning(f"Failed to take or attach screenshot: {e}")

    def _report(self, title: str, contents: str) -> None:
        try:
            self._reporter(title, contents)
        except Exception as e:
            logger.warning(f"Could not record report entry '{title}': {e}")
