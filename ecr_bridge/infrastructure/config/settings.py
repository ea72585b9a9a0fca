import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from ecr_bridge.domain.services.command_renderer import RenderOptions
from ecr_bridge.domain.value_objects.bridge_mode import BridgeMode
from ecr_bridge.domain.value_objects.payment_type import PaymentType

# environment variable -> settings field
ENV_FIELDS = {
    "HOST": "host",
    "PORT": "port",
    "ECR_BRIDGE_BON_PATH": "bon_path",
    "ECR_BRIDGE_BON_OK_PATH": "bon_ok_path",
    "ECR_BRIDGE_BON_ERR_PATH": "bon_err_path",
    "ECR_BRIDGE_FISCAL_CODE": "fiscal_code",
    "ECR_BRIDGE_CASH_CODE": "cash_code",
    "ECR_BRIDGE_CARD_CODE": "card_code",
    "ECR_BRIDGE_VAT_CODE": "vat_code",
    "BRIDGE_MODE": "mode",
    "RESPONSE_TIMEOUT": "response_timeout_ms",
    "Z_REPORT_TIMEOUT": "z_report_timeout_ms",
    "POLL_INTERVAL": "poll_interval_ms",
    "LOG_LEVEL": "log_level",
    "LOG_DIR": "log_dir",
    "APP_ENV": "app_env",
}


class SettingsError(Exception):
    """Raised when the bridge configuration is invalid."""


class BridgeSettings(BaseModel, frozen=True):
    host: str = "0.0.0.0"
    port: int = Field(default=9000, ge=1, le=65535)

    bon_path: Path = Path("C:/ECRBridge/Bon/")
    bon_ok_path: Path = Path("C:/ECRBridge/BonOK/")
    bon_err_path: Path = Path("C:/ECRBridge/BonErr/")

    fiscal_code: str | None = None
    cash_code: str = "1"
    card_code: str = "2"
    vat_code: str = "1"
    mode: BridgeMode = BridgeMode.TEST

    response_timeout_ms: int = Field(default=10_000, gt=0)
    z_report_timeout_ms: int = Field(default=30_000, gt=0)
    poll_interval_ms: int = Field(default=200, gt=0)

    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    app_env: str = "development"

    @field_validator("bon_path", "bon_ok_path", "bon_err_path", mode="before")
    @classmethod
    def require_path(cls, v: Path | str) -> Path | str:
        if not str(v).strip():
            raise ValueError("directory path is required")
        return v

    @field_validator("fiscal_code", mode="before")
    @classmethod
    def blank_fiscal_code_is_none(cls, v: str | None) -> str | None:
        if v is None or not str(v).strip():
            return None
        return str(v).strip()

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode(cls, v: BridgeMode | str) -> BridgeMode | str:
        return v.lower() if isinstance(v, str) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return v.upper()

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def render_options(self) -> RenderOptions:
        return RenderOptions(
            fiscal_code=self.fiscal_code,
            vat_code=self.vat_code,
            payment_codes={PaymentType.CASH: self.cash_code, PaymentType.CARD: self.card_code},
        )

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        env_file: Path | None = None,
    ) -> "BridgeSettings":
        """Build settings from environment variables.

        When ``env`` is omitted, ``.env`` (or ``env_file``) is loaded into
        the process environment first; existing variables win.
        """
        if env is None:
            load_dotenv(dotenv_path=env_file)
            env = os.environ

        values = {field: env[name] for name, field in ENV_FIELDS.items() if name in env}
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            details = ", ".join(
                f"{_env_name(err.get('loc', ()))}: {err.get('msg', '')}" for err in e.errors()
            )
            raise SettingsError(f"Invalid configuration: {details}") from None


def _env_name(loc: tuple[int | str, ...]) -> str:
    field = str(loc[0]) if loc else ""
    for name, mapped in ENV_FIELDS.items():
        if mapped == field:
            return name
    return field
