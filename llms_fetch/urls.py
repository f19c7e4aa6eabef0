"""URL variations to try for a documentation page (.md twins, llms.txt, raw GitHub files)."""

from urllib.parse import urlparse

RAW_GITHUB = "https://raw.githubusercontent.com"
DIRECT_SUFFIXES = (".md", ".txt")


def _is_github(url: str) -> bool:
    try:
        return urlparse(url).hostname == "github.com"
    except ValueError:
        return False


def _github_raw_variations(url: str) -> list[str]:
    """
    raw.githubusercontent.com URLs for /blob/ and /tree/ pages.
    Assumes a single-segment branch name; "feature/x" style branches are not recognized.
    """
    parts = urlparse(url).path.lstrip("/").split("/")
    if len(parts) < 4:
        return []
    owner, repo, kind = parts[0], parts[1], parts[2]
    if kind == "blob":
        return [f"{RAW_GITHUB}/{owner}/{repo}/{'/'.join(parts[3:])}"]
    if kind == "tree":
        branch = parts[3]
        subpath = "/".join(parts[4:])
        raw_base = f"{RAW_GITHUB}/{owner}/{repo}/{branch}"
        if subpath:
            raw_base = f"{raw_base}/{subpath}"
        return [f"{raw_base}/README.md"]
    return []


def get_url_variations(url: str) -> list[str]:
    """
    Candidate URLs in priority order, starting with url itself.

    .md / .txt URLs and URLs with a query string are fetched as-is.
    """
    variations = [url]
    if url.lower().endswith(DIRECT_SUFFIXES) or "?" in url:
        return variations

    base = url.rstrip("/")
    is_github = _is_github(url)
    if is_github:
        variations.extend(_github_raw_variations(url))

    variations.append(f"{base}.md")
    if is_github:
        variations.append(f"{base}/README.md")
    variations.append(f"{base}/index.md")
    variations.append(f"{base}/llms.txt")
    variations.append(f"{base}/llms-full.txt")
    return variations
