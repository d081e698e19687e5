import pytest

from reqsign.exceptions import BadURLError
from reqsign.utils import (
    aws_encode,
    b64encode,
    deep_update,
    hmac_sha1,
    hmac_sha256,
    md5_hex,
    parse_query_items,
    percent_encode,
    redact_url,
    sha1_hex,
    sha256_hex,
    split_url,
    stringify_value,
    url_port,
)


def test_digests():
    assert md5_hex('') == 'd41d8cd98f00b204e9800998ecf8427e'
    assert sha1_hex('abc') == 'a9993e364706816aba3e25717850c26c9cd0d89d'
    assert sha256_hex(b'') == ('e3b0c44298fc1c149afbf4c8996fb924'
                               '27ae41e4649b934ca495991b7852b855')


def test_hmacs():
    # RFC 2202 and RFC 4231, test case 2.
    msg = 'what do ya want for nothing?'
    assert hmac_sha1('Jefe', msg).hex() == 'effcdf6ae5eb2fa2d27416d5f184df9c259a7c79'
    assert hmac_sha256('Jefe', msg).hex() == ('5bdcc146bf60754e6a042426089575c7'
                                              '5a003f089d2739839dec58b964ec3843')


def test_b64encode():
    assert b64encode(b'Aladdin:open sesame') == 'QWxhZGRpbjpvcGVuIHNlc2FtZQ=='


def test_percent_encode():
    assert percent_encode('Ladies + Gentlemen') == 'Ladies%20%2B%20Gentlemen'
    assert percent_encode('An encoded string!') == 'An%20encoded%20string%21'
    assert percent_encode('-._~azAZ09') == '-._~azAZ09'
    assert percent_encode('a/b=c&d') == 'a%2Fb%3Dc%26d'
    assert percent_encode('café') == 'caf%C3%A9'


def test_aws_encode():
    assert aws_encode('a b/c') == 'a%20b%2Fc'
    assert aws_encode('~tilde') == '~tilde'


@pytest.mark.parametrize('value,expected', [
    (None, ''),
    (True, 'true'),
    (False, 'false'),
    (42, '42'),
    (3.14, '3.14'),
    ('text', 'text'),
])
def test_stringify_value(value, expected):
    assert stringify_value(value) == expected


def test_parse_query_items():
    items = parse_query_items('a=1&b=x+y&c=%20&&flag')
    assert items == [('a', '1'), ('b', 'x+y'), ('c', ' '), ('flag', '')]
    assert parse_query_items('') == []


def test_split_url():
    parts = split_url('https://Example.com:8443/path?q=1')
    assert parts.hostname == 'example.com'
    assert parts.port == 8443
    assert parts.query == 'q=1'


@pytest.mark.parametrize('url', [
    '',
    'not a url',
    '/relative/path',
    'http://example.com:99999/',
    'http:///no-host',
])
def test_split_url_bad(url):
    with pytest.raises(BadURLError):
        split_url(url)


def test_url_port():
    assert url_port(split_url('https://example.com/')) == 443
    assert url_port(split_url('http://example.com/')) == 80
    assert url_port(split_url('http://example.com:8080/')) == 8080


def test_deep_update():
    d = {'general': {'timeout': '30', 'user_agent': 'a'}}
    deep_update(d, {'general': {'timeout': 5}, 'logging': {'level': 'INFO'}})
    assert d == {
        'general': {'timeout': 5, 'user_agent': 'a'},
        'logging': {'level': 'INFO'},
    }


def test_redact_url():
    assert redact_url('https://e.com/a?api_key=s3cret&signature=abc&flag') == \
        'https://e.com/a?api_key=***&signature=***&flag=***'
    assert redact_url('https://e.com/a') == 'https://e.com/a'
