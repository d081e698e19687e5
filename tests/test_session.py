import json
import logging
import os

import pytest
import requests
import responses

import reqsign.session
from reqsign import (
    __version__,
    Method,
    OAuth2Authorization,
    PendingRequest,
    PlainSignature,
)
from reqsign.exceptions import JSONFormatError

BASE_URL = 'https://api.example.com/'

CONFIG = {
    'general': {
        'timeout': '15',
    },
    'logging': {
        'level': 'INFO',
        'file': 'test.log',
    },
}


def test_signing_session(tmpdir_ch):
    s = reqsign.session.SigningSession(CONFIG)
    assert os.path.isfile('test.log')

    assert CONFIG == s.config
    assert s.timeout == 15.0
    assert s.headers['user-agent'].startswith(f'reqsign/{__version__}')


def test_signing_session_config_file(session):
    assert session.timeout == 30.0
    assert session.headers['User-Agent'] == 'reqsign-tests/1.0'
    assert session.config['oauth1']['signature_method'] == 'HMAC-SHA256'


def test_prepare_pending_signs_with_session_headers(session):
    pending = PendingRequest(BASE_URL + 'me', Method.GET,
                             authorization=OAuth2Authorization('tok'))
    p = session.prepare_pending(pending, headers={'X-Trace': 'abc'},
                                signature=PlainSignature('kw'))
    assert p.headers['Authorization'] == 'Bearer tok'
    assert p.headers['User-Agent'] == 'reqsign-tests/1.0'
    assert p.headers['X-Trace'] == 'abc'
    assert p.headers['Signature'] == 'kw'


def test_send_pending(session, api_mocker):
    api_mocker.add_json_mock('items', method=responses.POST, body='{"id": 1}', status=201)
    pending = PendingRequest(BASE_URL + 'items', Method.POST,
                             authorization=OAuth2Authorization('tok'),
                             parameters={'name': 'widget', 'count': 3})
    r = session.send_pending(pending)

    assert r.status_code == 201
    sent = api_mocker.calls[0].request
    assert sent.headers['Authorization'] == 'Bearer tok'
    assert sent.headers['Content-Type'] == 'application/json'
    assert json.loads(sent.body) == {'name': 'widget', 'count': 3}


def test_get_json(session, api_mocker):
    api_mocker.add_json_mock('items', body='{"items": [1, 2]}')
    pending = PendingRequest(BASE_URL + 'items', Method.GET)
    assert session.get_json(pending) == {'items': [1, 2]}


def test_get_json_invalid_body(session, api_mocker):
    api_mocker.add_json_mock('items', body='not json')
    pending = PendingRequest(BASE_URL + 'items', Method.GET)
    with pytest.raises(JSONFormatError):
        session.get_json(pending)


def test_get_json_http_error(session, api_mocker):
    api_mocker.add_json_mock('items', body='{"error": "boom"}', status=500)
    pending = PendingRequest(BASE_URL + 'items', Method.GET)
    with pytest.raises(requests.HTTPError):
        session.get_json(pending)


def test_send_pending_timeout(session, monkeypatch):
    seen = {}

    def fake_send(prepared, **kwargs):
        seen.update(kwargs)
        return requests.Response()

    monkeypatch.setattr(session, 'send', fake_send)
    # Without a request timeout the configured one is used.
    session.send_pending(PendingRequest(BASE_URL, Method.GET))
    assert seen['timeout'] == 30.0

    session.send_pending(PendingRequest(BASE_URL, Method.GET, timeout=7.5))
    assert seen['timeout'] == 7.5

    session.send_pending(PendingRequest(BASE_URL, Method.GET),
                         request_kwargs={'timeout': 1})
    assert seen['timeout'] == 1


def test_set_file_logger(tmpdir_ch, session):
    session.set_file_logger('debug', 'debug.log', 'reqsign.tests')
    logging.getLogger('reqsign.tests').debug('hello')
    with open('debug.log') as fh:
        assert 'hello' in fh.read()


def test_prepare_pending_keeps_caller_request(session):
    pending = PendingRequest(BASE_URL, Method.GET)
    p = session.prepare_pending(pending)
    assert p.timeout == 30.0
    assert pending.timeout is None


def test_send_pending_log_hides_query_values(session, monkeypatch, caplog):
    monkeypatch.setattr(session, 'send', lambda prepared, **kwargs: requests.Response())
    pending = PendingRequest(BASE_URL + 'items', Method.GET, parameters={'token': 'abc123'})
    with caplog.at_level(logging.INFO, logger='reqsign'):
        session.send_pending(pending)
    assert 'abc123' not in caplog.text
    assert 'items?token=***' in caplog.text
