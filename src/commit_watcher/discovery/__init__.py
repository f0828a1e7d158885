from commit_watcher.discovery.links import LinkDiscovery, extract_links

__all__ = ["LinkDiscovery", "extract_links"]
