"""
wikislides - Wiki page to S5 slide show generator

Turns marked sections and <slides> blocks of a wiki page into an S5
presentation.
"""

__version__ = "1.0.0"

from .lib import SlideShow, ArticleView, WikiText, TagRegistry, LOG, state_connectToLogger

__all__ = ["SlideShow", "ArticleView", "WikiText", "TagRegistry", "LOG", "state_connectToLogger", "__version__"]
