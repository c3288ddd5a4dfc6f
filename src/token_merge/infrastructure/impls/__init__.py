from token_merge.infrastructure.impls.system import GithubActionsContext, OsFileSystem

__all__ = ["GithubActionsContext", "OsFileSystem"]
