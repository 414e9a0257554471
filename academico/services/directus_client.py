"""
Directus API Client

Reads the candidates offered for import from the institution's Directus
CMS:
- student applications  (/items/submissions)
- teaching staff        (/items/team_members, category "professor")

Authentication is e-mail/password; the bearer token is reused until one
minute before it expires and renewed once when Directus answers 401.
Results are cached in memory per collection for a few minutes.
"""

import logging
import re
import time
from typing import Any, Callable, Dict, List, Optional

import httpx
from fastapi import HTTPException

from academico.core.config import Settings, get_settings
from academico.schemas.integracao import CursoCandidato, DirectusAlunoCandidate, DirectusProfessorCandidate

logger = logging.getLogger(__name__)

TOKEN_MARGIN_SECONDS = 60
DEFAULT_TOKEN_TTL_SECONDS = 900
PREFERRED_LANGUAGES = ("pt-br", "pt_BR", "pt", "pt-BR")

SUBMISSIONS_PARAMS = {
    "limit": 200,
    "sort": "-date_created",
    "fields": "*.*,course.*,course.translations.*,course.translations.languages_id.*",
    "filter[status][_neq]": "archived",
}

TEAM_MEMBERS_PARAMS = {
    "limit": 200,
    "sort": "order",
    "fields": "*.*,photo.*,translations.*,translations.languages_id.*",
    "filter[category][_eq]": "professor",
    "filter[status][_neq]": "archived",
}


# ============================================================
# MAPPING HELPERS
# ============================================================

def preferred_translation(translations: Any) -> Optional[dict]:
    """The Portuguese translation when present, else the first one."""
    if not isinstance(translations, list):
        return None

    for code in PREFERRED_LANGUAGES:
        for item in translations:
            if not isinstance(item, dict):
                continue
            language = item.get("languages_id")
            if isinstance(language, dict):
                language = language.get("code")
            if isinstance(language, str) and language.lower() == code.lower():
                return item

    return translations[0] if translations else None


def map_gender(value: Any) -> Optional[str]:
    if not value:
        return None
    normalized = value.lower()
    if normalized.startswith("m"):
        return "M"
    if normalized.startswith("f"):
        return "F"
    return "O"


def only_digits(value: Any) -> Optional[str]:
    if not value:
        return None
    return re.sub(r"\D", "", str(value)) or None


def _str_id(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def map_submission(submission: dict) -> DirectusAlunoCandidate:
    course = submission.get("course")
    curso = None
    if isinstance(course, dict):
        translation = preferred_translation(course.get("translations") or []) or {}
        curso = CursoCandidato(
            id=_str_id(course.get("id")),
            slug=_str_id(course.get("slug")),
            title=_str_id(translation.get("title") or translation.get("name") or course.get("slug")),
        )

    return DirectusAlunoCandidate(
        id=str(submission.get("id")),
        name=_str_id(submission.get("name")) or "Sem nome",
        email=_str_id(submission.get("email") or submission.get("contact_email")),
        phone=_str_id(submission.get("telephone")),
        cellphone=_str_id(submission.get("cellphone")),
        cpf=only_digits(submission.get("cpf")),
        birth_date=_str_id(submission.get("birth_date")),
        gender=map_gender(submission.get("gender")),
        church=_str_id(submission.get("church")),
        denomination=_str_id(submission.get("denomination")),
        city=_str_id(submission.get("city") or submission.get("church_city")),
        state=_str_id(submission.get("uf") or submission.get("church_uf")),
        scheduling_date=_str_id(submission.get("scheduling_date")),
        scheduling_time=_str_id(submission.get("scheduling_time")),
        status=_str_id(submission.get("status")),
        course=curso,
        created_at=_str_id(submission.get("date_created")),
    )


def map_team_member(member: dict, asset_base: str) -> DirectusProfessorCandidate:
    translation = preferred_translation(member.get("translations") or []) or {}

    qualifications = member.get("qualifications")
    if isinstance(qualifications, list):
        qualifications = ", ".join(
            item["text"] for item in qualifications if isinstance(item, dict) and item.get("text")
        )
    elif not isinstance(qualifications, str):
        qualifications = None

    photo = member.get("photo")
    if isinstance(photo, dict):
        photo = photo.get("id")

    return DirectusProfessorCandidate(
        id=str(member.get("id")),
        name=_str_id(translation.get("name") or member.get("name")) or "Sem nome",
        position=_str_id(translation.get("position")),
        bio=_str_id(translation.get("bio")),
        category=_str_id(member.get("category")),
        status=_str_id(member.get("status")),
        qualifications=qualifications,
        photo_url=f"{asset_base}/assets/{photo}" if photo else None,
    )


# ============================================================
# CLIENT
# ============================================================

class DirectusClient:
    """
    Token-caching wrapper around the Directus REST API.

    ``transport`` and ``clock`` exist so tests can run without network.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings or get_settings()
        self.clock = clock
        self.http = httpx.Client(
            base_url=self.settings.directus_base_url,
            timeout=self.settings.directus_timeout_seconds,
            transport=transport,
        )
        self.token: Optional[str] = None
        self.token_expires_at = 0.0
        self._cache: Dict[str, tuple] = {}

    def _ensure_configured(self) -> None:
        if not self.settings.directus_enabled:
            raise HTTPException(status_code=503, detail="Integração com Directus não está configurada.")

    def _authenticate(self) -> None:
        self._ensure_configured()
        try:
            response = self.http.post(
                "/auth/login",
                json={"email": self.settings.directus_email, "password": self.settings.directus_password},
            )
            response.raise_for_status()
            data = response.json().get("data") or {}
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Falha ao autenticar no Directus: %s", e)
            raise HTTPException(status_code=502, detail="Não foi possível autenticar no Directus.") from e

        if not data.get("access_token"):
            raise HTTPException(status_code=502, detail="Não foi possível autenticar no Directus.")

        self.token = data["access_token"]
        # Directus reports ``expires`` in milliseconds on recent versions
        expires = data.get("expires") or DEFAULT_TOKEN_TTL_SECONDS
        if expires > 100_000:
            expires = expires / 1000
        self.token_expires_at = self.clock() + expires

    def _ensure_token(self) -> None:
        if not self.token or self.clock() >= self.token_expires_at - TOKEN_MARGIN_SECONDS:
            self._authenticate()

    def _get(self, path: str, params: dict, retry: bool = True) -> dict:
        self._ensure_token()
        try:
            response = self.http.get(path, params=params, headers={"Authorization": f"Bearer {self.token}"})
            if response.status_code == 401 and retry:
                self.token = None
                return self._get(path, params, retry=False)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Erro ao comunicar com o Directus (%s): %s", path, e)
            raise HTTPException(status_code=502, detail="Falha ao consultar dados no Directus") from e

    def _cached(self, key: str) -> Optional[list]:
        entry = self._cache.get(key)
        if entry and self.clock() < entry[0]:
            return entry[1]
        return None

    def _store(self, key: str, items: list) -> list:
        self._cache[key] = (self.clock() + self.settings.directus_cache_ttl_seconds, items)
        return items

    def get_aluno_candidates(self, refresh: bool = False) -> List[DirectusAlunoCandidate]:
        """Non-archived applications, newest first."""
        self._ensure_configured()
        if not refresh:
            cached = self._cached("submissions")
            if cached is not None:
                return cached

        body = self._get("/items/submissions", SUBMISSIONS_PARAMS)
        return self._store("submissions", [map_submission(s) for s in body.get("data") or []])

    def get_professor_candidates(self, refresh: bool = False) -> List[DirectusProfessorCandidate]:
        """Team members of category professor, in display order."""
        self._ensure_configured()
        if not refresh:
            cached = self._cached("professors")
            if cached is not None:
                return cached

        body = self._get("/items/team_members", TEAM_MEMBERS_PARAMS)
        base = self.settings.directus_base_url
        return self._store("professors", [map_team_member(m, base) for m in body.get("data") or []])

    def test_connection(self) -> bool:
        """Check credentials against Directus."""
        try:
            self._authenticate()
            return True
        except HTTPException as e:
            logger.warning("Directus connection failed: %s", e.detail)
            return False


# Singleton instance
_directus_client: Optional[DirectusClient] = None


def get_directus_client() -> DirectusClient:
    """Get or create Directus client (singleton pattern)"""
    global _directus_client
    if _directus_client is None:
        _directus_client = DirectusClient()
    return _directus_client
