"""
Transport configuration for the panel API client.

Self-hosted panels are commonly reached through a reverse proxy, a private
CA or both, so each of those is configurable. Everything else has defaults
suited to a single panel host.
"""
import logging
import ssl
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

import aiohttp


@dataclass
class ProxyConfig:
    """HTTP(S) proxy in front of the panel, with optional basic auth."""
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        return self.url or None

    def to_aiohttp_auth(self) -> Optional[aiohttp.BasicAuth]:
        if self.url and self.username:
            return aiohttp.BasicAuth(self.username, self.password or "")
        return None


@dataclass
class SSLConfig:
    """
    TLS settings for the panel connection.

    ``ca_file`` trusts a private CA; ``cert_file``/``key_file`` present a
    client certificate to panels that require one.
    """
    verify: bool = True
    ca_file: Optional[str] = None
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    check_hostname: bool = True

    def to_aiohttp_ssl(self) -> Union[bool, ssl.SSLContext]:
        """
        Value for the connector's ``ssl`` argument.

        ``False`` skips verification, ``True`` uses aiohttp's default
        context, anything custom yields an ``SSLContext``.
        """
        if not self.verify:
            return False

        if not (self.ca_file or self.cert_file or not self.check_hostname):
            return True

        context = ssl.create_default_context(cafile=self.ca_file)
        context.check_hostname = self.check_hostname
        if self.cert_file:
            context.load_cert_chain(self.cert_file, keyfile=self.key_file)
        return context


@dataclass
class TimeoutConfig:
    """
    Timeouts in seconds.

    ``total`` bounds API calls. Downloads stream arbitrarily large files,
    so only their connect and per-read timeouts apply.
    """
    total: float = 60.0
    connect: float = 10.0
    sock_read: float = 60.0
    sock_connect: float = 10.0

    def to_aiohttp_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )

    def to_download_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=None,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class APIConfig:
    """
    Options used to build the aiohttp session and each request.

    Example:
        >>> config = APIConfig.with_ca_bundle("/etc/ssl/panel-ca.pem")
        >>> panel = PanelClient("https://panel.lan", "ptlc_...", config=config)
    """
    user_agent: str = 'pterapy/1.0.0'
    max_redirects: int = 5

    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)

    extra_headers: Dict[str, str] = field(default_factory=dict)
    log_level: int = logging.WARNING

    # One panel host, few parallel calls
    limit: int = 20
    limit_per_host: int = 10

    @classmethod
    def default(cls) -> 'APIConfig':
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, username: Optional[str] = None,
                   password: Optional[str] = None, **kwargs) -> 'APIConfig':
        """Route every request through ``proxy_url``."""
        return cls(proxy=ProxyConfig(proxy_url, username, password), **kwargs)

    @classmethod
    def with_ca_bundle(cls, ca_file: str, **kwargs) -> 'APIConfig':
        """Trust the CA in ``ca_file`` (panels behind a private CA)."""
        return cls(ssl=SSLConfig(ca_file=ca_file), **kwargs)

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Disable certificate verification, e.g. for a self-signed test panel."""
        return cls(ssl=SSLConfig(verify=False, check_hostname=False), **kwargs)

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``aiohttp.TCPConnector``."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.to_aiohttp_ssl(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``aiohttp.ClientSession``."""
        return {
            'headers': {'User-Agent': self.user_agent, **self.extra_headers},
            'timeout': self.timeout.to_aiohttp_timeout(),
        }

    def get_request_kwargs(self) -> Dict[str, Any]:
        """Per-request keyword arguments shared by API calls and downloads."""
        kwargs: Dict[str, Any] = {'max_redirects': self.max_redirects}
        if self.proxy and self.proxy.to_aiohttp_proxy():
            kwargs['proxy'] = self.proxy.to_aiohttp_proxy()
            kwargs['proxy_auth'] = self.proxy.to_aiohttp_auth()
        return kwargs
