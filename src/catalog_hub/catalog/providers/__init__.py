"""Source fetchers for each upstream provider."""

from .github import GitHubPinnedFetcher, GitHubSearchFetcher
from .huggingface import HuggingFaceDatasetFetcher, HuggingFaceModelFetcher
from .kaggle import KaggleDatasetFetcher
from .public import PublicDatasetFetcher

__all__ = [
    "GitHubPinnedFetcher",
    "GitHubSearchFetcher",
    "HuggingFaceDatasetFetcher",
    "HuggingFaceModelFetcher",
    "KaggleDatasetFetcher",
    "PublicDatasetFetcher",
]
