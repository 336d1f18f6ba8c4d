from woodpuzzle.engine.context import SearchContext, SearchMode

__all__ = ["SearchContext", "SearchMode"]
