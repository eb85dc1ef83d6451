"""View-model coordinators publishing gist state through observables."""

from gistaviewer.viewmodels.account import AccountSession
from gistaviewer.viewmodels.gist_detail import GistDetailCoordinator
from gistaviewer.viewmodels.gist_list import GistFeed, GistListCoordinator

__all__ = ['AccountSession', 'GistDetailCoordinator', 'GistFeed', 'GistListCoordinator']
