"""
➡️ But : Sauvegarde automatique côté client (debounce).

Chaque frappe passe la note en UNSAVED et relance un minuteur ; quand le minuteur expire
sans nouvelle frappe, une seule requête /save part avec le contenu du moment.

États : SAVED -> UNSAVED -> SAVING -> SAVED | SAVE_FAILED
SAVE_FAILED n'est pas terminal : la frappe suivante relance le minuteur, retry() sauvegarde tout de suite.

Les sauvegardes d'une même note passent une par une (asyncio.Lock) : jamais deux requêtes
en vol, donc jamais d'écriture dans le désordre.

Toutes les méthodes doivent être appelées depuis la boucle asyncio.
"""

import asyncio
import enum
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

SaveFn = Callable[[int, str], Awaitable[None]]
StateCallback = Callable[["SaveState", "AutosaveCoordinator"], None]


class SaveState(str, enum.Enum):
    SAVED = "saved"
    UNSAVED = "unsaved"
    SAVING = "saving"
    SAVE_FAILED = "save_failed"


class DebouncedTask:
    """
    Tâche planifiée annulable : schedule() annule celle qui attend encore.
    Une fois le délai écoulé, le callback n'est plus annulable par schedule().
    """

    def __init__(self, delay: float, callback: Callable[[], Awaitable[None]]):
        self.delay = delay
        self.callback = callback
        self._waiting: Optional[asyncio.Task] = None
        self._running: set = set()

    @property
    def pending(self) -> bool:
        return self._waiting is not None and not self._waiting.done()

    def schedule(self) -> None:
        self.cancel()
        self._waiting = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        if self.pending:
            self._waiting.cancel()
        self._waiting = None

    async def _run(self) -> None:
        await asyncio.sleep(self.delay)
        # délai écoulé : on se détache pour qu'un schedule() ne coupe pas la sauvegarde
        task = asyncio.current_task()
        if self._waiting is task:
            self._waiting = None
        self._running.add(task)
        try:
            await self.callback()
        finally:
            self._running.discard(task)

    async def wait_running(self) -> None:
        if self._running:
            await asyncio.gather(*list(self._running), return_exceptions=True)


class AutosaveCoordinator:
    def __init__(
        self,
        note_id: int,
        save_fn: SaveFn,
        *,
        content: str = "",
        delay: float = 1.0,
        on_state_change: Optional[StateCallback] = None,
    ):
        self.note_id = note_id
        self.save_fn = save_fn
        self.on_state_change = on_state_change
        self.state = SaveState.SAVED
        self.last_error: Optional[BaseException] = None

        self._content = content
        self._version = 0
        self._saved_version = 0
        self._lock = asyncio.Lock()
        self._timer = DebouncedTask(delay, self._save_now)

    @property
    def content(self) -> str:
        return self._content

    @property
    def dirty(self) -> bool:
        return self._version != self._saved_version

    def _set_state(self, state: SaveState) -> None:
        if state == self.state:
            return
        self.state = state
        if self.on_state_change:
            self.on_state_change(state, self)

    # ---------- Événements ----------
    def edit(self, content: str) -> None:
        self._content = content
        self._version += 1
        self._set_state(SaveState.UNSAVED)
        self._timer.schedule()

    async def retry(self) -> None:
        """Relance manuelle après un échec."""
        self._timer.cancel()
        await self._save_now()

    async def flush(self) -> None:
        """Sauvegarde immédiate de ce qui attend encore (ex : avant de changer de note)."""
        self._timer.cancel()
        await self._timer.wait_running()
        await self._save_now()

    async def close(self) -> None:
        self._timer.cancel()
        await self._timer.wait_running()

    # ---------- Sauvegarde ----------
    async def _save_now(self) -> None:
        async with self._lock:
            version = self._version
            if version == self._saved_version:
                return
            snapshot = self._content

            self._set_state(SaveState.SAVING)
            try:
                await self.save_fn(self.note_id, snapshot)
            except Exception as e:
                self.last_error = e
                logger.warning("Autosave of note %s failed: %s", self.note_id, e)
                self._set_state(SaveState.SAVE_FAILED)
                return

            self.last_error = None
            self._saved_version = version
            if self._version == version:
                self._set_state(SaveState.SAVED)
            else:
                # frappe arrivée pendant la requête : le minuteur est déjà relancé
                self._set_state(SaveState.UNSAVED)
