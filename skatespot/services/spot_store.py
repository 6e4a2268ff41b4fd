"""
Spot Store - owns spots and check-ins, notifies subscribers and persists every change
"""
import logging
from datetime import datetime, timedelta
from typing import Callable, Collection, List, Optional, Tuple

from skatespot.core.clock import Clock, utc_now
from skatespot.core.exceptions import StorageError
from skatespot.core.ids import generate_id
from skatespot.models.spot import Spot, CheckIn, StoreState
from skatespot.schemas.spot import SpotCreate, CheckInCreate
from skatespot.services.state_repository import StateRepository

logger = logging.getLogger(__name__)

CHECKIN_EXPIRY_HOURS = 8
ANONYMOUS_SKATER_NAME = "Anônimo"

Listener = Callable[["SpotStore"], None]


class SpotStore:
    """
    In-process state container for spots and check-ins.

    All operations are synchronous. After each mutation the full state is
    handed to the repository, then subscribers are called in subscription
    order. Check-ins are never evicted on expiry; expiry only
    filters what get_active_check_ins returns.
    """

    def __init__(
        self,
        repository: StateRepository,
        clock: Clock = utc_now,
        id_factory: Callable[[], str] = generate_id,
        expiry: timedelta = timedelta(hours=CHECKIN_EXPIRY_HOURS),
        anonymous_name: str = ANONYMOUS_SKATER_NAME,
    ):
        self._repository = repository
        self._clock = clock
        self._id_factory = id_factory
        self.expiry = expiry
        self.anonymous_name = anonymous_name
        self._listeners: List[Listener] = []
        self.last_persist_error: Optional[str] = None

        restored = repository.load()
        self._spots: List[Spot] = list(restored.spots) if restored else []
        self._check_ins: List[CheckIn] = list(restored.check_ins) if restored else []

    # Reads

    @property
    def spots(self) -> Tuple[Spot, ...]:
        return tuple(self._spots)

    @property
    def check_ins(self) -> Tuple[CheckIn, ...]:
        return tuple(self._check_ins)

    @property
    def persistence_ok(self) -> bool:
        """False when the most recent save attempt failed"""
        return self.last_persist_error is None

    def get_spot(self, spot_id: str) -> Optional[Spot]:
        for spot in self._spots:
            if spot.id == spot_id:
                return spot
        return None

    def get_active_check_ins(self, spot_id: str, now: Optional[datetime] = None) -> List[CheckIn]:
        """
        Check-ins for a spot younger than the expiry window, oldest first.

        Args:
            spot_id: Spot ID
            now: Reference time; defaults to the store clock at call time

        Returns:
            Active check-ins in insertion order
        """
        now = now or self._clock()
        return [
            check_in for check_in in self._check_ins
            if check_in.spot_id == spot_id and check_in.is_active(now, self.expiry)
        ]

    def count_active_check_ins(self, spot_id: str, now: Optional[datetime] = None) -> int:
        return len(self.get_active_check_ins(spot_id, now))

    def snapshot(self) -> StoreState:
        return StoreState(spots=list(self._spots), check_ins=list(self._check_ins))

    # Mutations

    def add_spot(self, spot_data: SpotCreate) -> Spot:
        """
        Append a new spot

        Args:
            spot_data: Validated spot fields

        Returns:
            Created spot with generated id and createdAt
        """
        spot = Spot(
            id=self._new_id({s.id for s in self._spots}),
            name=spot_data.name,
            description=spot_data.description,
            type=spot_data.type,
            photo_url=spot_data.photo_url,
            lat=spot_data.lat,
            lng=spot_data.lng,
            created_at=self._clock(),
        )
        self._spots.append(spot)
        logger.info(f"Spot added: {spot.id}", extra={"spot_id": spot.id, "spot_type": spot.type.value})
        self._commit()
        return spot

    def remove_spot(self, spot_id: str) -> None:
        """Remove a spot and every check-in that references it; unknown ids are a no-op"""
        spots = [s for s in self._spots if s.id != spot_id]
        check_ins = [c for c in self._check_ins if c.spot_id != spot_id]
        removed_check_ins = len(self._check_ins) - len(check_ins)
        if len(spots) != len(self._spots):
            logger.info(
                f"Spot removed: {spot_id} ({removed_check_ins} check-ins cascaded)",
                extra={"spot_id": spot_id, "check_ins_removed": removed_check_ins},
            )
        self._spots = spots
        self._check_ins = check_ins
        self._commit()

    def add_check_in(self, spot_id: str, check_in_data: Optional[CheckInCreate] = None) -> CheckIn:
        """
        Append a check-in for a spot.

        The spot id is not checked against existing spots; callers that need
        a live spot must look it up first.

        Args:
            spot_id: Spot the skater is at
            check_in_data: Optional skater name and photo

        Returns:
            Created check-in
        """
        check_in_data = check_in_data or CheckInCreate()
        skater_name = (check_in_data.skater_name or "").strip() or self.anonymous_name
        check_in = CheckIn(
            id=self._new_id({c.id for c in self._check_ins}),
            spot_id=spot_id,
            skater_name=skater_name,
            photo_url=check_in_data.photo_url,
            timestamp=self._clock(),
        )
        self._check_ins.append(check_in)
        logger.info(f"Check-in added: {check_in.id}", extra={"spot_id": spot_id, "check_in_id": check_in.id})
        self._commit()
        return check_in

    def remove_check_in(self, check_in_id: str) -> None:
        """Remove a check-in; unknown ids are a no-op"""
        self._check_ins = [c for c in self._check_ins if c.id != check_in_id]
        self._commit()

    # Subscriptions

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called after every mutation.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Internals

    def _new_id(self, taken: Collection[str]) -> str:
        new_id = self._id_factory()
        while new_id in taken:
            new_id = self._id_factory()
        return new_id

    def _commit(self) -> None:
        self._persist()
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Store listener failed")

    def _persist(self) -> None:
        try:
            saved = self._repository.save(self.snapshot())
        except StorageError as e:
            logger.warning(f"State not persisted: {e.message}")
            saved = False
        except Exception:
            logger.exception("State repository failed while saving")
            saved = False

        if saved:
            self.last_persist_error = None
        else:
            self.last_persist_error = "State could not be persisted; changes will be lost on restart"
