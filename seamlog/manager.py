"""Routing of log addresses to the log clients that serve them."""

from __future__ import annotations

import random
from collections.abc import Mapping

from .logbase import (
    LogAddress,
    LogClient,
    LogFactory,
    LogOffset,
    LogProducer,
    LogSubscriber,
    endpoint_scheme,
    endpoint_servers,
)


class LogRegistry:
    """Log factories keyed by the endpoint scheme they serve."""

    def __init__(self) -> None:
        self._factories: dict[str, LogFactory] = {}

    def register(self, factory: LogFactory) -> None:
        """Register ``factory``; raise ``ValueError`` if its scheme is taken."""
        scheme = factory.scheme()
        if scheme in self._factories:
            raise ValueError(f"log factory for scheme {scheme} already registered")
        self._factories[scheme] = factory

    def find_factory(self, scheme: str) -> LogFactory | None:
        """The factory for ``scheme``, or ``None``."""
        return self._factories.get(scheme)

    async def new_client(
        self, endpoint: str, params: Mapping[str, str] | None = None
    ) -> LogClient:
        """Open a new client to ``endpoint`` through the factory of its scheme."""
        factory = self.find_factory(endpoint_scheme(endpoint))
        if factory is None:
            raise LookupError(f"no log factory for scheme of endpoint {endpoint}")
        return await factory.open_client(endpoint, dict(params or {}))

    async def into_manager(
        self, endpoint: str, params: Mapping[str, str] | None = None
    ) -> LogManager:
        """A manager whose active client is opened to ``endpoint``."""
        client = await self.new_client(endpoint, params)
        return LogManager(self, client, endpoint)

    def __repr__(self) -> str:
        return f"LogRegistry(schemes={sorted(self._factories)})"


class LogManager:
    """Creates logs on an active cluster and routes other addresses to their clients."""

    def __init__(self, registry: LogRegistry, active_client: LogClient, active_address: str) -> None:
        self.registry = registry
        self.active_client = active_client
        self.active_address = str(active_address)
        self._cluster_clients: dict[str, LogClient] = {}
        self._balanced_clients: dict[str, list[LogClient]] = {}
        self._add_balanced_client(self.active_address, active_client)

    @classmethod
    async def create(
        cls, factory: LogFactory, endpoint: str, params: Mapping[str, str] | None = None
    ) -> LogManager:
        """A manager with only ``factory`` registered, active on ``endpoint``."""
        registry = LogRegistry()
        registry.register(factory)
        return await registry.into_manager(endpoint, params)

    async def open_client(
        self, endpoint: str, params: Mapping[str, str] | None = None
    ) -> LogClient:
        """The client for ``endpoint``, opening a new one if none exists for it yet."""
        client = self._get_cluster_client(endpoint)
        if client is not None:
            return client
        client = await self.registry.new_client(endpoint, params)
        self._add_balanced_client(endpoint, client)
        self._cluster_clients[endpoint] = client
        return client

    def _add_balanced_client(self, endpoint: str, client: LogClient) -> None:
        servers = endpoint_servers(endpoint)
        if len(servers) < 2:
            return
        for server in servers:
            self._balanced_clients.setdefault(server, []).append(client)

    def _get_cluster_client(self, endpoint: str) -> LogClient | None:
        if self.active_address == endpoint:
            return self.active_client
        return self._cluster_clients.get(endpoint)

    def _get_balanced_client(self, endpoint: str) -> LogClient | None:
        servers = endpoint_servers(endpoint)
        random.shuffle(servers)
        for server in servers:
            clients = self._balanced_clients.get(server)
            if clients:
                return random.choice(clients)
        return None

    def get_client(self, endpoint: str) -> LogClient | None:
        """The client serving ``endpoint``: a cluster client first, else a balanced one."""
        client = self._get_cluster_client(endpoint)
        if client is not None:
            return client
        return self._get_balanced_client(endpoint)

    def _find_client(self, address: str) -> tuple[LogClient, str]:
        address = LogAddress(address)
        client = self.get_client(address.endpoint())
        if client is None:
            raise LookupError(f"no client for log address: {address}")
        return client, address.name()

    def locate_log(self, name: str) -> LogAddress:
        """Address of the log ``name`` on the active cluster."""
        return LogAddress(f"{self.active_address}/{name}")

    async def create_log(self, name: str, retention: int) -> LogAddress:
        """Create the log ``name`` on the active cluster and return its address."""
        await self.active_client.create_log(name, retention)
        return self.locate_log(name)

    async def delete_log(self, address: str) -> None:
        client, name = self._find_client(address)
        await client.delete_log(name)

    async def produce_log(self, address: str) -> LogProducer:
        client, name = self._find_client(address)
        return await client.produce_log(name)

    async def subscribe_log(self, address: str, offset: LogOffset) -> LogSubscriber:
        client, name = self._find_client(address)
        return await client.subscribe_log(name, offset)

    def __repr__(self) -> str:
        return f"LogManager(active={self.active_address!r}, clusters={sorted(self._cluster_clients)})"