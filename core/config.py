import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from exceptions import ConfigurationError, UnsupportedPlatformError, create_error_context


logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

ANDROID = "Android"
IOS = "iOS"
SUPPORTED_PLATFORMS = (ANDROID, IOS)

DEFAULT_SERVER_URL = "http://localhost:4723"
DEFAULT_SERVER_PATH = "/wd/hub"
DEFAULT_IMPLICIT_WAIT = 10
DEFAULT_EXPLICIT_WAIT = 20
DEFAULT_APP_PATH = "apps/mda-2.2.0-25.apk"
NEW_COMMAND_TIMEOUT = 300

# Per-platform fallbacks, keyed by the lower-case platform suffix of the env vars
PLATFORM_DEFAULTS = {
    "android": {
        "device_name": "sdk_gphone64_x86_64",
        "platform_version": "16",
        "app_package": "com.saucelabs.mydemoapp.android",
        "app_activity": "com.saucelabs.mydemoapp.android.view.activities.SplashActivity",
    },
    "ios": {
        "device_name": "iPhone Simulator",
        "platform_version": "15.0",
        "app_package": "com.saucelabs.mydemoapp.ios",
        "app_activity": "com.saucelabs.mydemoapp.ios.MainActivity",
    },
}


def normalize_platform(platform_name: str) -> str:
    # Case-insensitive match against the supported platform names
    for supported in SUPPORTED_PLATFORMS:
        if platform_name.strip().lower() == supported.lower():
            return supported
    raise UnsupportedPlatformError(platform_name, list(SUPPORTED_PLATFORMS))


def resolve_app_path(app: str) -> str:
    # Relative app paths are resolved against the project root; URLs pass through
    if not app or "://" in app or Path(app).is_absolute():
        return app
    return str(PROJECT_ROOT / app)


def _read_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{key} must be an integer, got '{raw}'",
            config_key=key,
            expected_format="integer number of seconds/attempts",
            error_context=create_error_context(component="Configuration", operation="read_int"),
            cause=e
        ) from e


@dataclass(frozen=True)
class PlatformProfile:
    # Device and app identity for one platform
    device_name: str
    platform_version: str
    app: str
    app_package: str
    app_activity: str

    @classmethod
    def from_env(cls, platform: str, environ: Mapping[str, str]) -> "PlatformProfile":
        suffix = platform.lower()
        defaults = PLATFORM_DEFAULTS[suffix]
        upper = suffix.upper()
        return cls(
            device_name=environ.get(f"SAUCEDEMO_DEVICE_{upper}", defaults["device_name"]),
            platform_version=environ.get(f"SAUCEDEMO_OS_VERSION_{upper}", defaults["platform_version"]),
            app=resolve_app_path(environ.get(f"SAUCEDEMO_APP_{upper}", DEFAULT_APP_PATH)),
            app_package=environ.get(f"SAUCEDEMO_APP_PACKAGE_{upper}", defaults["app_package"]),
            app_activity=environ.get(f"SAUCEDEMO_APP_ACTIVITY_{upper}", defaults["app_activity"]),
        )


@dataclass(frozen=True)
class SessionSettings:
    """Everything needed to open an Appium session, read once at startup."""

    platform_name: str = ANDROID
    server_url: str = DEFAULT_SERVER_URL
    server_path: str = DEFAULT_SERVER_PATH
    implicit_wait: int = DEFAULT_IMPLICIT_WAIT
    explicit_wait: int = DEFAULT_EXPLICIT_WAIT
    session_attempts: int = 1
    profiles: Dict[str, PlatformProfile] = field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SessionSettings":
        environ = os.environ if environ is None else environ

        # Platform is validated later, when a driver is actually requested
        profiles = {
            platform: PlatformProfile.from_env(platform, environ)
            for platform in SUPPORTED_PLATFORMS
        }
        settings = cls(
            platform_name=environ.get("PLATFORM_NAME", ANDROID),
            server_url=environ.get("APPIUM_SERVER_URL", DEFAULT_SERVER_URL),
            server_path=environ.get("APPIUM_SERVER_PATH", DEFAULT_SERVER_PATH),
            implicit_wait=_read_int(environ, "APPIUM_IMPLICIT_WAIT", DEFAULT_IMPLICIT_WAIT),
            explicit_wait=_read_int(environ, "APPIUM_EXPLICIT_WAIT", DEFAULT_EXPLICIT_WAIT),
            session_attempts=_read_int(environ, "APPIUM_SESSION_ATTEMPTS", 1),
            profiles=profiles,
        )
        logger.debug(f"Loaded session settings for platform {settings.platform_name}")
        return settings

    @property
    def command_executor(self) -> str:
        return self.server_url.rstrip("/") + self.server_path

    def profile_for(self, platform: str) -> PlatformProfile:
        if platform not in self.profiles:
            return PlatformProfile.from_env(platform, {})
        return self.profiles[platform]

    def capabilities(self, platform_name: Optional[str] = None) -> Dict[str, Any]:
        """Build the capability set for a platform.

        Raises UnsupportedPlatformError for anything other than Android/iOS.
        """
        platform = normalize_platform(platform_name or self.platform_name)
        profile = self.profile_for(platform)

        if platform == ANDROID:
            return {
                "platformName": ANDROID,
                "automationName": "UiAutomator2",
                "deviceName": profile.device_name,
                "platformVersion": profile.platform_version,
                "app": profile.app,
                "appPackage": profile.app_package,
                "appActivity": profile.app_activity,
                "autoGrantPermissions": True,
                "noReset": False,
                "newCommandTimeout": NEW_COMMAND_TIMEOUT,
                "autoAcceptAlerts": True,
            }

        return {
            "platformName": IOS,
            "automationName": "XCUITest",
            "deviceName": profile.device_name,
            "platformVersion": profile.platform_version,
            "app": profile.app,
            "autoAcceptAlerts": True,
            "noReset": False,
            "newCommandTimeout": NEW_COMMAND_TIMEOUT,
        }


@dataclass(frozen=True)
class JourneyData:
    # Test data shared by the login and checkout journeys
    valid_username: str = "bob@example.com"
    valid_password: str = "10203040my"
    invalid_username: str = "invalid_user"
    invalid_password: str = "invalid_password"
    default_product: str = "Sauce Labs Backpack"
    checkout_required_message: str = "First Name is required"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "JourneyData":
        environ = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            valid_username=environ.get("SAUCEDEMO_USERNAME", defaults.valid_username),
            valid_password=environ.get("SAUCEDEMO_PASSWORD", defaults.valid_password),
        )
