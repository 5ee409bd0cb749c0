"""
➡️ But : Client HTTP asynchrone de l'API CloudPad (httpx).

Garde le cookie de session entre les appels, comme le ferait le navigateur.
Toute réponse non 2xx lève ApiError (status + detail), jamais ignorée.
"""

from typing import Any, Dict, List, Optional

import httpx

from cloudpad.client.autosave import AutosaveCoordinator, StateCallback


class ApiError(Exception):
    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


class CloudPadClient:
    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "CloudPadClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ---------- Helpers ----------
    @staticmethod
    def _check(response: httpx.Response) -> httpx.Response:
        if response.is_success:
            return response
        try:
            detail = response.json().get("detail", response.text)
        except ValueError:
            detail = response.text
        raise ApiError(response.status_code, str(detail))

    # ---------- Auth ----------
    async def register(self, username: str, password: str) -> Dict[str, Any]:
        r = await self._http.post("/register", json={"username": username, "password": password})
        return self._check(r).json()

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        r = await self._http.post("/login", json={"username": username, "password": password})
        return self._check(r).json()

    async def logout(self) -> None:
        r = await self._http.get("/logout", follow_redirects=False)
        if r.status_code not in (302, 303, 307):
            self._check(r)
        self._http.cookies.clear()

    async def me(self) -> str:
        r = await self._http.get("/me")
        return self._check(r).json()["username"]

    # ---------- Notes ----------
    async def list_notes(self) -> List[Dict[str, Any]]:
        r = await self._http.get("/notes")
        return self._check(r).json()

    async def new_note(self) -> Dict[str, Any]:
        r = await self._http.post("/notes/new")
        return self._check(r).json()

    async def save(self, note_id: int, content: str) -> None:
        r = await self._http.post("/save", json={"noteId": note_id, "content": content})
        self._check(r)

    async def open_latest(self) -> Dict[str, Any]:
        """Dernière note modifiée, ou une nouvelle si l'utilisateur n'en a aucune."""
        notes = await self.list_notes()
        if notes:
            return notes[0]
        return await self.new_note()

    def autosave(
        self,
        note: Dict[str, Any],
        *,
        delay: float = 1.0,
        on_state_change: Optional[StateCallback] = None,
    ) -> AutosaveCoordinator:
        return AutosaveCoordinator(
            note["id"],
            self.save,
            content=note.get("content") or "",
            delay=delay,
            on_state_change=on_state_change,
        )
