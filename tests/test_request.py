import hashlib
import json
import logging

import pytest

from reqsign import (
    APIKeyAuthorization,
    AWSSignatureV4Authorization,
    BasicAuthorization,
    BearerToken,
    CachePolicy,
    DigestAuthorization,
    HawkAuthorization,
    MD5Signature,
    Method,
    OAuth1Authorization,
    OAuth2Authorization,
    PendingRequest,
    PlainSignature,
)
from reqsign.exceptions import (
    BadRequestAuthorizationError,
    BadRequestParametersError,
    BadURLError,
    UnsupportedAuthorizationError,
)
from reqsign.request import (
    SignedPreparedRequest,
    SignedRequest,
    append_query,
    build_request,
    encode_query,
    encode_url,
)

URL = 'https://api.example.com/v1/items'

ALL_AUTHORIZATIONS = [
    None,
    BasicAuthorization('u', 'p'),
    DigestAuthorization('u', 'p', 'realm', 'nonce', '/v1/items'),
    BearerToken('t'),
    APIKeyAuthorization('api_key', 'k'),
    OAuth1Authorization('ck', 'cs'),
    OAuth2Authorization('t'),
    HawkAuthorization('hawk_id', 'key'),
    AWSSignatureV4Authorization('ak', 'sk', 'us-east-1', 'execute-api'),
]


def test_encode_url():
    assert encode_url('https://example.com/a b/café') == 'https://example.com/a%20b/caf%C3%A9'
    assert encode_url('https://example.com/a%20b') == 'https://example.com/a%20b'


@pytest.mark.parametrize('url', ['', 'not a url', 'ftp://example.com/file', '//example.com'])
def test_encode_url_bad(url):
    with pytest.raises(BadURLError):
        encode_url(url)


def test_encode_query():
    assert encode_query({'q': 'a+b c', 'n': 1, 'ok': True, 'none': None}) == \
        'q=a%2Bb%20c&n=1&ok=true&none='
    assert encode_query({'e': 'x&y=z#'}) == 'e=x%26y%3Dz%23'


def test_append_query():
    assert append_query('https://e.com/a', 'x=1') == 'https://e.com/a?x=1'
    assert append_query('https://e.com/a?y=2', 'x=1') == 'https://e.com/a?y=2&x=1'
    assert append_query('https://e.com/a', '') == 'https://e.com/a'


@pytest.mark.parametrize('authorization', ALL_AUTHORIZATIONS)
@pytest.mark.parametrize('method', list(Method))
def test_bad_url_fails_for_every_scheme(context, authorization, method):
    pending = PendingRequest('not a url', method, authorization=authorization,
                             parameters={'a': 1})
    with pytest.raises(BadURLError):
        build_request(pending, context=context)


@pytest.mark.parametrize('authorization', ALL_AUTHORIZATIONS[1:])
@pytest.mark.parametrize('method', list(Method))
def test_authorization_header_exactly_once(context, authorization, method):
    pending = PendingRequest(URL, method, authorization=authorization)
    p = build_request(pending, headers={'authorization': 'stale'}, context=context)
    names = [k for k in p.headers if k.lower() == 'authorization']
    if isinstance(authorization, APIKeyAuthorization):
        # The stale header is left alone, API keys never set Authorization.
        assert p.headers['authorization'] == 'stale'
    else:
        assert len(names) == 1
        assert p.headers['Authorization'] != 'stale'


def test_get_parameters_in_query(context):
    pending = PendingRequest(URL, Method.GET,
                             parameters={'q': 'a+b', 'page': 2, 'all': False})
    p = build_request(pending, context=context)
    assert p.url == URL + '?q=a%2Bb&page=2&all=false'
    assert p.body is None
    assert p.headers['Content-Type'] == 'application/json'


def test_get_parameters_merge_with_existing_query(context):
    pending = PendingRequest(URL + '?x=1', Method.DELETE, parameters={'y': 'a b'})
    p = build_request(pending, context=context)
    assert p.url == URL + '?x=1&y=a%20b'
    assert p.body is None


@pytest.mark.parametrize('method', [Method.POST, Method.PUT, Method.PATCH])
def test_body_parameters_as_json(context, method):
    parameters = {
        'string_param': 'value',
        'int_param': 42,
        'double_param': 3.14,
        'bool_param': True,
        'null_param': None,
    }
    p = build_request(PendingRequest(URL, method, parameters=parameters), context=context)
    assert p.url == URL
    assert p.method == method.value
    assert json.loads(p.body) == parameters
    assert p.headers['Content-Type'] == 'application/json'
    assert p.headers['Content-Length'] == str(len(p.body))


def test_body_without_parameters(context):
    p = build_request(PendingRequest(URL, Method.POST), context=context)
    assert p.body is None


@pytest.mark.parametrize('parameters', [
    {'nan': float('nan')},
    {'inf': float('inf')},
    {'obj': object()},
])
def test_bad_body_parameters(context, parameters):
    with pytest.raises(BadRequestParametersError) as exc_info:
        build_request(PendingRequest(URL, Method.POST, parameters=parameters),
                      context=context)
    assert exc_info.value.parameters == parameters


def test_api_key_get_goes_in_query(context):
    pending = PendingRequest(URL, Method.GET, authorization=APIKeyAuthorization('api_key', 's3cret'),
                             parameters={'q': 'x'})
    p = build_request(pending, context=context)
    assert p.url == URL + '?q=x&api_key=s3cret'
    assert 'api_key' not in p.headers
    assert 'Authorization' not in p.headers


def test_api_key_post_goes_in_header(context):
    pending = PendingRequest(URL, Method.POST, authorization=APIKeyAuthorization('X-Api-Key', 's3cret'),
                             parameters={'q': 'x'})
    p = build_request(pending, context=context)
    assert p.url == URL
    assert p.headers['X-Api-Key'] == 's3cret'
    assert json.loads(p.body) == {'q': 'x'}


def test_api_key_does_not_touch_caller_parameters(context):
    parameters = {'q': 'x'}
    pending = PendingRequest(URL, Method.GET, authorization=APIKeyAuthorization('k', 'v'),
                             parameters=parameters)
    build_request(pending, context=context)
    assert parameters == {'q': 'x'}


def test_md5_signature(context):
    digest = hashlib.md5(b'secret').hexdigest()
    p = build_request(PendingRequest(URL, Method.POST), signature=MD5Signature('secret'),
                      context=context)
    assert p.url == f'{URL}?signature={digest}'

    p = build_request(PendingRequest(URL, Method.GET, parameters={'a': 1}),
                      signature=MD5Signature('secret'), context=context)
    assert p.url == f'{URL}?signature={digest}&a=1'


def test_plain_signature(context):
    p = build_request(PendingRequest(URL, Method.GET), signature=PlainSignature('kw'),
                      context=context)
    assert p.headers['Signature'] == 'kw'
    assert p.url == URL


def test_unsupported_authorization(context):
    with pytest.raises(UnsupportedAuthorizationError):
        build_request(PendingRequest(URL, Method.GET, authorization=object()),
                      context=context)


def test_bad_credentials(context):
    pending = PendingRequest(URL, Method.GET, authorization=BearerToken(None))
    with pytest.raises(BadRequestAuthorizationError):
        build_request(pending, context=context)


def test_timeout_and_cache_policy(context):
    pending = PendingRequest(URL, 'get', timeout=5.0,
                             cache_policy=CachePolicy.RELOAD_IGNORING_LOCAL_CACHE)
    p = build_request(pending, context=context)
    assert isinstance(p, SignedPreparedRequest)
    assert p.method == 'GET'
    assert p.timeout == 5.0
    assert p.cache_policy is CachePolicy.RELOAD_IGNORING_LOCAL_CACHE

    copied = p.copy()
    assert copied.timeout == 5.0
    assert copied.cache_policy is CachePolicy.RELOAD_IGNORING_LOCAL_CACHE


def test_signed_request_prepare(context):
    req = SignedRequest(method='PUT',
                        url=URL,
                        headers={'X-Trace': '1'},
                        authorization=BasicAuthorization('Aladdin', 'open sesame'),
                        parameters={'a': 1},
                        context=context)
    p = req.prepare()
    assert p.headers['Authorization'] == 'Basic QWxhZGRpbjpvcGVuIHNlc2FtZQ=='
    assert p.headers['X-Trace'] == '1'
    assert p.body == b'{"a": 1}'


def test_caller_headers_do_not_override_content_type(context):
    p = build_request(PendingRequest(URL, Method.POST, parameters={'a': 1}),
                      headers={'Content-Type': 'text/plain'}, context=context)
    assert p.headers['Content-Type'] == 'application/json'


def test_default_timeout(context):
    p = build_request(PendingRequest(URL, Method.GET), context=context)
    assert p.timeout == 60.0


def test_log_records_hide_query_secrets(context, caplog):
    pending = PendingRequest(URL, Method.GET,
                             authorization=APIKeyAuthorization('api_key', 'TOPSECRET'))
    with caplog.at_level(logging.DEBUG, logger='reqsign'):
        p = build_request(pending, signature=MD5Signature('s'), context=context)

    digest = hashlib.md5(b's').hexdigest()
    assert 'TOPSECRET' in p.url
    assert 'TOPSECRET' not in caplog.text
    assert digest not in caplog.text
    assert 'signature=***&api_key=***' in caplog.text
