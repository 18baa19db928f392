from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Sequence
from types import MappingProxyType
from typing import Protocol

import httpx

from voltweb.constants import STATUS_POLL_INTERVAL_S
from voltweb.models import ServerDescriptor, ServerStatus, StatusMap

StatusCallback = Callable[[StatusMap], None]

_EMPTY: StatusMap = MappingProxyType({})


class StatusQueryClient(Protocol):
    async def query_server(self, address: str, port: int) -> httpx.Response: ...


async def _query_one(descriptor: ServerDescriptor, client: StatusQueryClient) -> ServerStatus:
    """Query one server; every failure becomes the synthetic offline status."""
    try:
        response = await client.query_server(descriptor.address, descriptor.port)
        if response.is_success:
            return ServerStatus.from_payload(response.json())
        logging.warning(
            "Status query %s answered %s", descriptor.endpoint, response.status_code
        )
    except Exception as e:
        logging.warning("Status query %s failed: %s", descriptor.endpoint, e)
    return ServerStatus.offline(descriptor)


async def poll_all(
    descriptors: Sequence[ServerDescriptor], client: StatusQueryClient
) -> StatusMap:
    """
    Query every descriptor concurrently and return a fresh, complete StatusMap.

    The map holds one entry per descriptor id whatever the individual outcomes;
    nothing is returned until every query has settled.
    """
    if not descriptors:
        return _EMPTY
    statuses = await asyncio.gather(*(_query_one(d, client) for d in descriptors))
    return MappingProxyType({d.id: s for d, s in zip(descriptors, statuses)})


class StatusPoller:
    """
    Keeps a StatusMap fresh for one view.

    - start(): poll immediately, then every `interval` seconds on one timer task.
    - stop(): cancel the timer; a cycle that settles afterwards is discarded.
    - subscribe(): get every newly published map.
    """

    def __init__(
        self,
        descriptors: Iterable[ServerDescriptor],
        client: StatusQueryClient,
        interval: float = STATUS_POLL_INTERVAL_S,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        self.descriptors: tuple[ServerDescriptor, ...] = tuple(descriptors)
        self.client = client
        self.interval = interval
        self.cycles = 0
        self._status_map: StatusMap = _EMPTY
        self._subscribers: list[StatusCallback] = []
        self._task: asyncio.Task | None = None
        self._stopped = False
        # Cycle numbers: assigned when a cycle starts, compared when it settles
        self._started_seq = 0
        self._published_seq = 0
        self._stop_seq = 0

    @property
    def status_map(self) -> StatusMap:
        return self._status_map

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, callback: StatusCallback) -> Callable[[], None]:
        """Register a callback; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def start(self) -> None:
        if self.running:
            return
        self._stopped = False
        self._task = asyncio.create_task(self._run(), name="status-poller")
        logging.debug(
            "Status poller started: %d servers every %.0fs",
            len(self.descriptors),
            self.interval,
        )

    def stop(self) -> None:
        self._stopped = True
        self._stop_seq = self._started_seq
        if self._task is not None:
            self._task.cancel()
            self._task = None
            logging.debug("Status poller stopped after %d cycles", self.cycles)

    async def refresh(self) -> StatusMap:
        """
        Run one cycle now and publish it.

        The result is discarded when the poller was stopped after the cycle
        started, or when a cycle that started later has already been published.
        """
        self._started_seq += 1
        seq = self._started_seq
        status_map = await poll_all(self.descriptors, self.client)
        if self._stopped or seq <= self._stop_seq:
            logging.debug("Discarding status cycle %d that finished after stop", seq)
            return status_map
        if seq <= self._published_seq:
            logging.debug("Discarding status cycle %d, cycle %d is newer", seq, self._published_seq)
            return status_map
        self._published_seq = seq
        self._publish(status_map)
        return status_map

    async def _run(self) -> None:
        try:
            while True:
                await self.refresh()
                await asyncio.sleep(self.interval)
        except asyncio.CancelledError:
            pass

    def _publish(self, status_map: StatusMap) -> None:
        self._status_map = status_map
        self.cycles += 1
        online = sum(1 for s in status_map.values() if s.online)
        logging.info("Server status: %d/%d online", online, len(status_map))
        for callback in list(self._subscribers):
            try:
                callback(status_map)
            except Exception as e:
                logging.error("Status subscriber failed: %s", e)
