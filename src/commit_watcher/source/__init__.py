from commit_watcher.source.atom import parse_atom
from commit_watcher.source.http_fetcher import FetchError, FetchResult, HttpFetcher

__all__ = ["FetchError", "FetchResult", "HttpFetcher", "parse_atom"]
