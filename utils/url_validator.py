"""
SSRF Protection Module

Guards the recipe importer's page fetch. Only public http(s) hosts are
fetched, redirects are refused, and response bodies are capped.
"""

import ipaddress
import socket
from urllib.parse import urlparse

import requests

DEFAULT_USER_AGENT = 'Mozilla/5.0 (compatible; MiseApp/1.0)'
MAX_RESPONSE_SIZE = 5 * 1024 * 1024
FETCH_TIMEOUT = 10

LOCALHOST_ALIASES = frozenset({
    'localhost', 'localhost.localdomain', 'ip6-localhost', 'ip6-loopback',
})


class SSRFError(Exception):
    """Raised when a recipe URL points somewhere the importer must not go."""
    pass


def is_private_ip(ip_str):
    """True for loopback, private, link-local and other non-public addresses."""
    try:
        address = ipaddress.ip_address(ip_str.split('%', 1)[0])
    except ValueError:
        return True
    return not address.is_global or address.is_multicast


def _resolved_addresses(hostname):
    try:
        infos = socket.getaddrinfo(hostname, None, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except socket.gaierror:
        raise SSRFError(f"Cannot resolve hostname: {hostname}") from None
    return {info[4][0] for info in infos}


def check_url(url):
    """
    Raise SSRFError unless url is an http(s) URL on a public host.

    Hostnames are resolved and every address they map to must be public.
    """
    if not url:
        raise SSRFError("Empty URL")
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        raise SSRFError("Invalid URL format") from None

    if parsed.scheme not in ('http', 'https'):
        raise SSRFError(f"Only http and https URLs can be imported, not {parsed.scheme or 'none'}")
    if not hostname:
        raise SSRFError("No hostname in URL")
    if hostname.lower() in LOCALHOST_ALIASES:
        raise SSRFError("Cannot access localhost")

    for address in _resolved_addresses(hostname):
        if is_private_ip(address):
            raise SSRFError(f"{hostname} resolves to a private/internal address ({address})")


def is_safe_url(url):
    """Returns (is_safe, error_message)."""
    try:
        check_url(url)
    except SSRFError as e:
        return False, str(e)
    return True, None


def _read_capped(response, max_size):
    declared = response.headers.get('content-length', '')
    if declared.isdigit() and int(declared) > max_size:
        raise SSRFError(f"Response too large: {declared} bytes (max {max_size})")

    body = bytearray()
    for chunk in response.iter_content(chunk_size=8192):
        body.extend(chunk)
        if len(body) > max_size:
            raise SSRFError(f"Response exceeded maximum size of {max_size} bytes")
    return bytes(body)


def safe_fetch(url, headers=None, timeout=FETCH_TIMEOUT, max_size=MAX_RESPONSE_SIZE):
    """
    Fetch a recipe page after SSRF checks.

    Returns the requests.Response with its body already read.

    Raises:
        SSRFError: If the URL is not public, redirects, or the body is too large
        requests.RequestException: For network and HTTP errors
    """
    check_url(url)

    response = requests.get(
        url,
        headers=headers or {'User-Agent': DEFAULT_USER_AGENT},
        timeout=timeout,
        stream=True,
        allow_redirects=False,
    )
    try:
        # A public host could redirect to an internal one
        if response.is_redirect:
            raise SSRFError(f"Refusing to follow redirect to {response.headers.get('location') or 'unknown location'}")
        response.raise_for_status()
        response._content = _read_capped(response, max_size)
    finally:
        response.close()
    return response
