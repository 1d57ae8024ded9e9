import logging
import os
import platform
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import Any, Dict, Optional

import allure

from core.config import SessionSettings, normalize_platform
from core.security import sanitize_for_allure
from exceptions import UnsupportedPlatformError


logger = logging.getLogger(__name__)

ENVIRONMENT_PROPERTIES_FILENAME = "environment.properties"


def record_report_data(title: str, contents: Any) -> None:
    # Text attachment on the current Allure test, masked like the logs
    allure.attach(
        sanitize_for_allure(contents),
        name=title,
        attachment_type=allure.attachment_type.TEXT,
    )


def attach_screenshot(png: Optional[bytes], name: str = "Screenshot") -> bool:
    if not png:
        return False
    allure.attach(png, name=name, attachment_type=allure.attachment_type.PNG)
    return True


def _package_version(distribution: str) -> str:
    try:
        return version(distribution)
    except PackageNotFoundError:
        return "N/A"


def environment_properties(settings: SessionSettings) -> Dict[str, str]:
    try:
        profile = settings.profile_for(normalize_platform(settings.platform_name))
    except UnsupportedPlatformError:
        profile = None
    return {
        "operating_system": f"{platform.system()} {platform.release()}",
        "python_version": sys.version.split(" ")[0],
        "appium_python_client_version": _package_version("Appium-Python-Client"),
        "selenium_version": _package_version("selenium"),
        "pytest_bdd_version": _package_version("pytest-bdd"),
        "appium_server": settings.command_executor,
        "platform_name": settings.platform_name,
        "device_name": profile.device_name if profile else "N/A",
        "platform_version": profile.platform_version if profile else "N/A",
    }


def write_environment_properties(allure_dir: Optional[str], settings: SessionSettings) -> Optional[str]:
    """Write environment.properties for the Allure report.

    Returns the file path, or None when no results directory is configured
    or it cannot be written.
    """
    if not allure_dir or not isinstance(allure_dir, str):
        return None

    properties_file = os.path.join(allure_dir, ENVIRONMENT_PROPERTIES_FILENAME)

    try:
        os.makedirs(allure_dir, exist_ok=True)
    except PermissionError:
        logger.error(f"Permission denied to create report directory: {allure_dir}")
        return None

    try:
        with open(properties_file, "w", encoding="utf-8") as f:
            for key, value in environment_properties(settings).items():
                f.write(f"{key}={value}\n")
    except IOError as e:
        logger.error(f"Failed to write environment properties file: {e}")
        return None

    return properties_file
