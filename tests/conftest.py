import os
import sys
from datetime import datetime, timezone

import pytest
import responses
from responses import RequestsMock

from reqsign import SigningContext, SigningSession
from reqsign.cli import rs

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
TEST_CONFIG = os.path.join(ROOT_DIR, 'tests/reqsign.ini')
BASE_URL = 'https://api.example.com/'

# 2015-08-30T12:36:00Z, the date used by the AWS SigV4 test suite.
FIXED_TIME = datetime(2015, 8, 30, 12, 36, 0, tzinfo=timezone.utc)
FIXED_NONCE = 'kllo9940pd9333jh'


def fixed_context(when=FIXED_TIME, nonce=FIXED_NONCE):
    return SigningContext(clock=lambda: when, nonce=lambda: nonce)


def _rs_call(argv, expected_exit_code=0):
    # Use a test config for all `reqsign` tests.
    argv.insert(1, '--config-file')
    argv.insert(2, TEST_CONFIG)
    sys.argv = argv
    try:
        rs.main()
    except SystemExit as exc:
        exit_code = exc.code if exc.code else 0
        assert exit_code == expected_exit_code
    else:
        assert expected_exit_code == 0


class ApiRequestsMock(RequestsMock):
    def add_json_mock(self, path, body='{"ok": true}', method=responses.GET, status=200):
        self.add(method, BASE_URL + path, body=body, status=status,
                 content_type='application/json')


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    # Never pick up a developer's own configuration file.
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.setenv('XDG_CONFIG_HOME', str(tmp_path / '.config'))
    monkeypatch.delenv('REQSIGN_CONFIG_FILE', raising=False)


@pytest.fixture
def tmpdir_ch(tmpdir):
    tmpdir.chdir()
    return tmpdir


@pytest.fixture
def context():
    return fixed_context()


@pytest.fixture
def rs_call():
    return _rs_call


@pytest.fixture
def session(context):
    return SigningSession(config_file=TEST_CONFIG, context=context)


@pytest.fixture
def api_mocker():
    with ApiRequestsMock() as mocker:
        yield mocker


@pytest.fixture
def make_context():
    return fixed_context
