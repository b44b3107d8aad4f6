"""Package catalog service client."""

from osdpkg.service.client import PackageServiceClient, parse_packages

__all__ = ["PackageServiceClient", "parse_packages"]
