from pathlib import Path

import pytest

from ecr_bridge.domain.value_objects import BridgeMode
from ecr_bridge.infrastructure.config.settings import BridgeSettings


@pytest.fixture
def mailbox_root(tmp_path: Path) -> Path:
    root = tmp_path / "ECRBridge"
    root.mkdir()
    return root


@pytest.fixture
def bon_dir(mailbox_root: Path) -> Path:
    return mailbox_root / "Bon"


@pytest.fixture
def ok_dir(mailbox_root: Path) -> Path:
    return mailbox_root / "BonOK"


@pytest.fixture
def err_dir(mailbox_root: Path) -> Path:
    return mailbox_root / "BonErr"


@pytest.fixture
def settings(bon_dir: Path, ok_dir: Path, err_dir: Path, tmp_path: Path) -> BridgeSettings:
    return BridgeSettings(
        bon_path=bon_dir,
        bon_ok_path=ok_dir,
        bon_err_path=err_dir,
        mode=BridgeMode.LIVE,
        response_timeout_ms=300,
        z_report_timeout_ms=300,
        poll_interval_ms=10,
        log_dir=tmp_path / "logs",
    )
