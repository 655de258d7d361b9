from tl.ado_mcp_adapter.errors import PullRequestNotFoundError, RepositoryMismatchError


def _same_repository(requested: str, repository) -> bool:
    requested = requested.lower()
    for value in (getattr(repository, 'id', None), getattr(repository, 'name', None)):
        if value and value.lower() == requested:
            return True
    return False


def validate_pull_request_repository(git_client, repository_id: str, pull_request_id: int, project: str):
    """Check that a pull request belongs to the given repository.

    Args:
        git_client: SDK GitClient
        repository_id: Repository ID or name the caller asked for
        pull_request_id: Pull request to look up
        project: Project name or ID

    Returns:
        The pull request, so callers do not need to fetch it again

    Raises:
        PullRequestNotFoundError: If the pull request does not exist
        RepositoryMismatchError: If it belongs to another repository
    """
    pull_request = git_client.get_pull_request(
        repository_id=repository_id, pull_request_id=pull_request_id, project=project
    )
    if not pull_request:
        raise PullRequestNotFoundError(pull_request_id, repository_id)

    repository = pull_request.repository
    if repository is not None and not _same_repository(repository_id, repository):
        raise RepositoryMismatchError(pull_request_id, repository_id, getattr(repository, 'id', None))
    return pull_request
