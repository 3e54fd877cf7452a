"""Connection settings for Redis and NSQ, and the cache, locker and queue sections."""

from __future__ import annotations

import logging
import socket
import ssl
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

_log = logging.getLogger(__name__)


@dataclass
class Tls:
    """Paths of a certificate, its key and the CA bundle used to check peers."""

    cert: str = ""
    key: str = ""
    ca: str = ""


def load_tls(tls: Tls | None) -> ssl.SSLContext | None:
    """Build a TLS context that requires and verifies client certificates.

    Returns None when no certificate is configured, or when the CA file holds
    no usable certificate.
    """
    if tls is None or not tls.cert:
        return None
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(tls.cert, tls.key or None)
    with open(tls.ca, encoding="ascii", errors="replace") as stream:
        ca_data = stream.read()
    try:
        context.load_verify_locations(cadata=ca_data)
    except ssl.SSLError as exc:
        _log.warning("no certificate could be read from %s: %s", tls.ca, exc)
        return None
    context.verify_mode = ssl.CERT_REQUIRED
    return context


@dataclass
class RedisClientOptions:
    """Options handed to a Redis client."""

    network: str = ""
    addr: str = ""
    username: str = ""
    password: str = ""
    db: int = 0
    max_retries: int = 0
    pool_size: int = 0
    tls_config: ssl.SSLContext | None = None


@dataclass
class RedisConnectOptions:
    """How to reach a Redis server, as written in the configuration."""

    network: str = ""
    addr: str = ""
    username: str = ""
    password: str = ""
    db: int = 0
    pool_size: int = 0
    tls: Tls | None = None
    max_retries: int = 0

    def get_redis_options(self) -> RedisClientOptions:
        """Return client options, loading the TLS files when configured."""
        return RedisClientOptions(
            network=self.network,
            addr=self.addr,
            username=self.username,
            password=self.password,
            db=self.db,
            max_retries=self.max_retries,
            pool_size=self.pool_size,
            tls_config=load_tls(self.tls),
        )


def _short_hostname() -> str:
    return socket.gethostname().split(".")[0]


@dataclass
class NSQConfig:
    """Settings for an NSQ producer or consumer, with the client's defaults."""

    dial_timeout: timedelta = timedelta(seconds=1)
    read_timeout: timedelta = timedelta(seconds=60)
    write_timeout: timedelta = timedelta(seconds=1)
    lookupd_poll_interval: timedelta = timedelta(seconds=60)
    lookupd_poll_jitter: float = 0.3
    max_requeue_delay: timedelta = timedelta(minutes=15)
    default_requeue_delay: timedelta = timedelta(seconds=90)
    max_backoff_duration: timedelta = timedelta(minutes=2)
    backoff_multiplier: timedelta = timedelta(seconds=1)
    max_attempts: int = 5
    low_rdy_idle_timeout: timedelta = timedelta(seconds=10)
    low_rdy_timeout: timedelta = timedelta(seconds=30)
    rdy_redistribute_interval: timedelta = timedelta(seconds=5)
    client_id: str = field(default_factory=_short_hostname)
    hostname: str = field(default_factory=socket.gethostname)
    user_agent: str = ""
    heartbeat_interval: timedelta = timedelta(seconds=30)
    sample_rate: int = 0
    tls_config: ssl.SSLContext | None = None
    deflate: bool = False
    deflate_level: int = 6
    snappy: bool = False
    output_buffer_size: int = 16384
    output_buffer_timeout: timedelta = timedelta(milliseconds=250)
    max_in_flight: int = 1
    msg_timeout: timedelta = timedelta(0)
    auth_secret: str = ""


@dataclass
class NSQOptions:
    """NSQ settings as written in the configuration.

    Durations are whole seconds, except max_backoff_duration in milliseconds;
    zero or empty values keep the client's defaults.
    """

    dial_timeout: int = 0
    read_timeout: int = 0
    write_timeout: int = 0
    addresses: list[str] = field(default_factory=list)
    lookupd_poll_interval: int = 0
    lookupd_poll_jitter: float = 0.0
    max_requeue_delay: int = 0
    default_requeue_delay: int = 0
    max_backoff_duration: int = 0
    backoff_multiplier: int = 0
    max_attempts: int = 0
    low_rdy_idle_timeout: int = 0
    low_rdy_timeout: int = 0
    rdy_redistribute_interval: int = 0
    client_id: str = ""
    hostname: str = ""
    user_agent: str = ""
    heartbeat_interval: int = 0
    sample_rate: int = 0
    tls: Tls | None = None
    deflate: bool = False
    deflate_level: int = 0
    snappy: bool = False
    output_buffer_size: int = 0
    output_buffer_timeout: int = 0
    max_in_flight: int = 0
    msg_timeout: int = 0
    auth_secret: str = ""

    def get_nsq_options(self) -> NSQConfig:
        """Return client settings with the configured values laid over the defaults."""
        cfg = NSQConfig(tls_config=load_tls(self.tls))
        for name in (
            "dial_timeout",
            "read_timeout",
            "write_timeout",
            "lookupd_poll_interval",
            "max_requeue_delay",
            "default_requeue_delay",
            "backoff_multiplier",
            "low_rdy_idle_timeout",
            "low_rdy_timeout",
            "rdy_redistribute_interval",
            "heartbeat_interval",
            "output_buffer_timeout",
            "msg_timeout",
        ):
            seconds = getattr(self, name)
            if seconds > 0:
                setattr(cfg, name, timedelta(seconds=seconds))
        if self.max_backoff_duration > 0:
            cfg.max_backoff_duration = timedelta(milliseconds=self.max_backoff_duration)
        if self.lookupd_poll_jitter > 0:
            cfg.lookupd_poll_jitter = self.lookupd_poll_jitter
        cfg.max_attempts = self.max_attempts
        for name in ("client_id", "hostname", "user_agent", "auth_secret"):
            if getattr(self, name):
                setattr(cfg, name, getattr(self, name))
        for name in ("sample_rate", "output_buffer_size", "max_in_flight"):
            if getattr(self, name) > 0:
                setattr(cfg, name, getattr(self, name))
        cfg.deflate = self.deflate
        if 6 <= self.deflate_level <= 9:
            cfg.deflate_level = self.deflate_level
        cfg.snappy = self.snappy
        return cfg


@dataclass
class CacheSettings:
    """Cache section: Redis when configured, memory otherwise."""

    redis: RedisConnectOptions | None = None
    memory: Any = None


@dataclass
class LockerSettings:
    """Distributed lock section."""

    redis: RedisConnectOptions | None = None

    def empty(self) -> bool:
        return self.redis is None


@dataclass
class QueueRedis(RedisConnectOptions):
    """A Redis stream queue: the connection plus producer and consumer settings."""

    producer: Any = None
    consumer: Any = None


@dataclass
class QueueMemory:
    """An in-process queue."""

    pool_size: int = 0


@dataclass
class QueueNSQ(NSQOptions):
    """An NSQ queue: the connection plus the prefix of its channels."""

    channel_prefix: str = ""


@dataclass
class QueueSettings:
    """Queue section: Redis, NSQ or memory."""

    redis: QueueRedis | None = None
    memory: QueueMemory | None = None
    nsq: QueueNSQ | None = None

    def empty(self) -> bool:
        return self.memory is None and self.redis is None and self.nsq is None