# Shared pytest fixtures
from __future__ import annotations

import re
import tempfile
from pathlib import Path
from typing import Any

import pytest
import requests

from taglabels.logging.init import reset_logging

CSV_HEADER = "Style Number,Size,Color,(Do not touch) Order Id"


class FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeHttp:
    """Stand-in for requests.Session; records every GET."""

    def __init__(self) -> None:
        self.payload: Any = []
        self.status_code = 200
        self.error: Exception | None = None
        self.calls: list[tuple[str, Any]] = []

    def get(self, url: str, timeout: Any = None) -> FakeResponse:
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return FakeResponse(self.payload, self.status_code)


@pytest.fixture(autouse=True)
def fake_http(monkeypatch) -> FakeHttp:
    # 実ネットワークには絶対に出ない
    http = FakeHttp()
    monkeypatch.setattr(requests, "Session", lambda: http)
    return http


@pytest.fixture(autouse=True)
def clean_logging(monkeypatch):
    reset_logging()
    monkeypatch.delenv("TAGLABELS_CATALOG_URL", raising=False)
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def catalog_payload() -> list[dict[str, Any]]:
    return [
        {"style_code": 1001, "style_name": "Flared Midi Dress", "mrp": 1299},
        {"style_code": 1045, "style_name": "Ribbed Co-ord Set", "mrp": 1899.5},
        {"style_code": 1001, "style_name": "Duplicate Should Not Win", "mrp": 1},
        {"style_code": 1100, "style_name": "", "mrp": 0},
    ]


@pytest.fixture()
def sample_config_yaml() -> str:
    return """catalog:
  url: https://catalog.example.test/api/product
  timeout_seconds: 5
csv:
  columns:
    order_id: "(Do not touch) Order Id"
label:
  brand: Qurvii
  raster_scale: 1
pdf:
  filename: tag-labels.pdf
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "tags.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(lines: list[str], name: str = "cutting_list.csv", header: str | None = CSV_HEADER) -> Path:
        path = temp_workdir / "data" / name
        body = ([header] if header is not None else []) + lines
        path.write_text("\n".join(body) + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture()
def pdf_page_count():
    def _count(data: bytes) -> int:
        return len(re.findall(rb"/Type\s*/Page(?![a-zA-Z])", data))
    return _count


@pytest.fixture()
def pdf_media_boxes():
    def _boxes(data: bytes) -> list[tuple[float, ...]]:
        boxes = re.findall(rb"/MediaBox\s*\[\s*([-\d.\s]+?)\s*\]", data)
        return [tuple(float(v) for v in box.split()) for box in boxes]
    return _boxes
