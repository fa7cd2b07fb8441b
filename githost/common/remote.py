"""Git remote URL parsing.

Remote URLs identify the hosting platform, owner, and repository of a
worktree. Only the public hosts are recognised; self-hosted instances parse
to an empty result and must be configured explicitly.
"""

from __future__ import annotations

import dataclasses
import re

from githost.models import ProviderId

_HOST_TO_PROVIDER: dict[str, ProviderId] = {
    "github.com": ProviderId.GITHUB,
    "gitlab.com": ProviderId.GITLAB,
    "bitbucket.org": ProviderId.BITBUCKET,
}

_KNOWN_HOSTS = "|".join(re.escape(host) for host in _HOST_TO_PROVIDER)

_HTTPS_RE = re.compile(rf"https?://({_KNOWN_HOSTS})/([^/]+)/([^/]+)")
_SSH_RE = re.compile(rf"git@({_KNOWN_HOSTS}):([^/]+)/(.+)")


@dataclasses.dataclass(frozen=True, slots=True)
class ParsedRemoteUrl:
    """Components extracted from a git remote URL.

    Attributes
    ----------
    provider
        Hosting platform, or ``None`` for unrecognised hosts.
    owner
        Repository owner or namespace.
    repo
        Repository name without a ``.git`` suffix.
    repo_url
        Canonical HTTPS web URL, e.g. ``https://github.com/owner/repo``.

    """

    provider: ProviderId | None = None
    owner: str | None = None
    repo: str | None = None
    repo_url: str | None = None


def parse_remote_url(url: str) -> ParsedRemoteUrl:
    """Parse an HTTPS or SSH git remote URL.

    Parameters
    ----------
    url
        Remote URL as printed by ``git remote get-url``.

    Returns
    -------
    ParsedRemoteUrl
        Parsed components; every field is ``None`` when the URL does not
        point at a known host.

    Examples
    --------
    >>> parse_remote_url("git@gitlab.com:group/project.git").repo_url
    'https://gitlab.com/group/project'

    """
    normalized = url.strip().removesuffix(".git")

    match = _HTTPS_RE.search(normalized) or _SSH_RE.search(normalized)
    if match is None:
        return ParsedRemoteUrl()

    host, owner, repo = match.groups()
    return ParsedRemoteUrl(
        provider=_HOST_TO_PROVIDER[host],
        owner=owner,
        repo=repo,
        repo_url=f"https://{host}/{owner}/{repo}",
    )
