"""Artifact download with a pluggable on-disk cache.

The default ``FilenameCache`` treats an existing ``<artifact>-<version>.jar``
as a valid cached copy without looking at its content.  ``DigestCache``
keeps a SHA-256 sidecar next to each jar and evicts files whose content no
longer matches.

Downloads stream to ``<name>.part`` and are renamed into place only once
complete, so an interrupted transfer never looks like a cache hit.  Two
concurrent runs for the same jar still race on the final rename; the last
writer wins.
"""

import hashlib
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

import requests

from .config import Settings
from .downloaders import retrying
from .errors import FetchError
from .models import Coordinate, LocalArtifact

CHUNK_SIZE = 1024 * 1024


def artifact_url(repository_url: str, coordinate: Coordinate, version: str) -> str:
    """Location of a jar in a Maven 2 repository layout."""
    return (
        f"{repository_url.rstrip('/')}/{coordinate.group_path}/"
        f"{coordinate.artifact}/{version}/{coordinate.jar_name(version)}"
    )


class ArtifactCache(ABC):
    """Where downloaded jars live and when a stored one can be reused.

    Attributes:
        directory: Directory holding the cached jars.
    """

    def __init__(self, directory: Path):
        self.directory = directory

    def path_for(self, coordinate: Coordinate, version: str) -> Path:
        return (self.directory / coordinate.jar_name(version)).absolute()

    @abstractmethod
    def lookup(self, path: Path) -> bool:
        """Return ``True`` if ``path`` holds a reusable copy."""
        ...

    def store(self, path: Path, chunks: Iterable[bytes]) -> None:
        """Write ``chunks`` to ``path`` atomically (write-then-rename).

        Raises:
            OSError: on any filesystem failure; the partial file is removed.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".part")
        try:
            with tmp.open("wb") as f:
                for chunk in chunks:
                    if chunk:
                        f.write(chunk)
            tmp.replace(path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise


class FilenameCache(ArtifactCache):
    """A file with the expected name is a hit.  No integrity check."""

    def lookup(self, path: Path) -> bool:
        return path.is_file()


class DigestCache(ArtifactCache):
    """Cache that validates jars against a stored SHA-256 digest.

    A hit requires both the jar and ``<jar>.sha256`` to exist and agree.
    Anything else evicts the jar so it is downloaded again.
    """

    @staticmethod
    def digest_path(path: Path) -> Path:
        return path.with_name(path.name + ".sha256")

    @staticmethod
    def file_digest(path: Path) -> str:
        h = hashlib.sha256()
        with path.open("rb") as f:
            for block in iter(lambda: f.read(CHUNK_SIZE), b""):
                h.update(block)
        return h.hexdigest()

    def stored_digest(self, path: Path) -> str | None:
        """Digest recorded for ``path``, or ``None`` if the sidecar is unusable."""
        try:
            return self.digest_path(path).read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError):
            return None

    def lookup(self, path: Path) -> bool:
        sidecar = self.digest_path(path)
        if not path.is_file():
            return False
        if self.stored_digest(path) == self.file_digest(path):
            return True
        print(f"Cached {path.name} failed digest check, downloading again.")
        path.unlink(missing_ok=True)
        sidecar.unlink(missing_ok=True)
        return False

    def store(self, path: Path, chunks: Iterable[bytes]) -> None:
        super().store(path, chunks)
        self.digest_path(path).write_text(self.file_digest(path) + "\n", encoding="utf-8")


def cache_for(settings: Settings) -> ArtifactCache:
    """Pick the cache implementation named by ``settings``."""
    if settings.verify_cache:
        return DigestCache(settings.download_dir)
    return FilenameCache(settings.download_dir)


def fetch_artifact(
    session: requests.Session,
    coordinate: Coordinate,
    version: str,
    cache: ArtifactCache,
    settings: Settings,
) -> LocalArtifact:
    """Make the jar for ``coordinate``/``version`` available locally.

    Args:
        session: Requests session.
        coordinate: Group and artifact of the jar.
        version: Version to fetch.
        cache: Cache deciding the local path and reuse policy.
        settings: Repository URL, timeouts and retry count.

    Returns:
        ``LocalArtifact`` pointing at the jar.

    Raises:
        FetchError: on a transport, HTTP status or filesystem failure.
    """
    path = cache.path_for(coordinate, version)
    url = artifact_url(settings.repository_url, coordinate, version)
    try:
        hit = cache.lookup(path)
    except OSError as e:
        raise FetchError(url, f"could not read {path}: {e}") from e
    if hit:
        print(f"File {path.name} already exists, skipping download.")
        return LocalArtifact(path=path, coordinate=coordinate, version=version, cached=True)

    print(f"Downloading jar file '{path.name}'")
    try:
        r = retrying(settings.http_retries)(
            session.get,
            url,
            stream=True,
            timeout=settings.http_timeout,
            headers={"Accept": "*/*"},
        )
        with r:
            if not r.ok:
                raise FetchError(url, f"HTTP {r.status_code}")
            cache.store(path, r.iter_content(chunk_size=CHUNK_SIZE))
    except requests.RequestException as e:
        raise FetchError(url, str(e)) from e
    except OSError as e:
        raise FetchError(url, f"could not write {path}: {e}") from e

    print("Jar file is downloaded")
    return LocalArtifact(path=path, coordinate=coordinate, version=version, cached=False)
