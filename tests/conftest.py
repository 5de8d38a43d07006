"""Shared fixtures for tracker tests."""

import json
from datetime import datetime, timezone

import pytest

from emstracker.models import TrackingStatusInfo


CORRECT_DOCUMENT = """
<table class='emsHeader'>
  <tr>
    <td style='font-weight:bold;'>EMS номер:</td>
    <td>EP011980873RU</td>
  </tr>
  <tr>
    <td style='font-weight:bold;vertical-align:top;'>Принято к пересылке:</td>
    <td>Санкт-Петербург УКД-2<br>
    Отправление EMS Обыкновенное<br>
    Без разряда<br>
    Без отметки</td>
  </tr>
  <tr>
    <td style='font-weight:bold;'>Отправитель:</td>
    <td>КОСТЫЛЕВА</td>
  </tr>
  <tr>
    <td style='font-weight:bold;'>Получатель:</td>
    <td>0</td>
  </tr>
  <tr>
    <td style='font-weight:bold;'>Адресовано:</td>
    <td>423800, Набережные Челны</td>
  </tr>
</table>

<table class='emsNumber'>
  <tr>
    <th>Дата</th>
    <th>Почтовый<br>
    индекс</th>
    <th>Описание</th>
    <th>Статус</th>
    <th>Вес<br>
    (кг.)</th>
    <th>Объявл.<br>
    ценность<br>
    (руб.)</th>
    <th>Налож.<br>
    платёж<br>
    (руб.)</th>
  </tr>
  <tr>
    <td nowrap>24.11.2016 16:30</td>
    <td nowrap>190882</td>
    <td nowrap>Санкт-Петербург УКД-2</td>
    <td nowrap>Прием, Единичный</td>
    <td nowrap>1.188</td>
    <td nowrap>-</td>
    <td nowrap>-</td>
  </tr>
  <tr>
    <td nowrap>24.11.2016 21:56</td>
    <td nowrap>190882</td>
    <td nowrap>Санкт-Петербург УКД-2</td>
    <td nowrap>Покинуло сортировочный центр</td>
    <td nowrap>-</td>
    <td nowrap>-</td>
    <td nowrap>-</td>
  </tr>
  <tr>
    <td nowrap>25.11.2016 00:10</td>
    <td nowrap>200994</td>
    <td nowrap>Санкт-Петербург АСЦ EMS</td>
    <td nowrap>Сортировка</td>
    <td nowrap>-</td>
    <td nowrap>-</td>
    <td nowrap>-</td>
  </tr>
</table>
"""


EXPECTED_EVENTS = [
    TrackingStatusInfo(
        date=datetime(2016, 11, 24, 16, 30, tzinfo=timezone.utc),
        zip_code="190882",
        description="Санкт-Петербург УКД-2",
        status="Прием, Единичный",
        weight="1.188",
    ),
    TrackingStatusInfo(
        date=datetime(2016, 11, 24, 21, 56, tzinfo=timezone.utc),
        zip_code="190882",
        description="Санкт-Петербург УКД-2",
        status="Покинуло сортировочный центр",
        weight="-",
    ),
    TrackingStatusInfo(
        date=datetime(2016, 11, 25, 0, 10, tzinfo=timezone.utc),
        zip_code="200994",
        description="Санкт-Петербург АСЦ EMS",
        status="Сортировка",
        weight="-",
    ),
]


def make_envelope(html: str) -> bytes:
    return json.dumps({"d": html}, ensure_ascii=False).encode("utf-8")


class FakeResponse:
    """Stand-in for ``requests.Response``."""

    def __init__(self, status_code: int = 200, content: bytes = b"", read_error: Exception = None):
        self.status_code = status_code
        self._content = content
        self._read_error = read_error
        self.closed = False

    @property
    def content(self) -> bytes:
        if self._read_error is not None:
            raise self._read_error
        return self._content

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.closed = True


class FakeSession:
    """Records POST calls and replays a canned response or exception."""

    def __init__(self, response: FakeResponse = None, error: Exception = None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def correct_document():
    return CORRECT_DOCUMENT


@pytest.fixture
def expected_events():
    return [event.model_copy() for event in EXPECTED_EVENTS]


@pytest.fixture
def envelope():
    """Build a JSON envelope around an HTML fragment."""
    return make_envelope


@pytest.fixture
def fake_session():
    """Build a fake HTTP session."""
    def _make(status_code=200, content=b"", read_error=None, error=None):
        return FakeSession(FakeResponse(status_code, content, read_error), error)
    return _make
