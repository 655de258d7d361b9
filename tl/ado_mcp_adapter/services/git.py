"""Repository and pull request operations."""

from azure.devops.v7_1.git.models import (
    Comment,
    CommentPosition,
    CommentThreadContext,
    GitPullRequest,
    GitPullRequestCommentThread,
    GitPullRequestCompletionOptions,
    GitPullRequestSearchCriteria,
    GitQueryCommitsCriteria,
    GitRepositoryCreateOptions,
    IdentityRefWithVote,
    TeamProjectReference,
)
from tl.ado_mcp_adapter.enums import (
    COMMENT_THREAD_STATUS,
    COMMENT_TYPE,
    DEFAULT_MERGE_STRATEGY,
    MERGE_STATUS,
    MERGE_STRATEGY,
    PULL_REQUEST_STATUS,
)
from tl.ado_mcp_adapter.errors import PullRequestNotFoundError
from tl.ado_mcp_adapter.services.base import AzureDevOpsService, remote_operation
from tl.ado_mcp_adapter.services.validation import validate_pull_request_repository
from typing import Any, Dict, List, Optional

APPROVE_VOTE = 10

# Column offsets spanning a whole line when commenting on a file.
LINE_START_OFFSET = 1
LINE_END_OFFSET = 999


def _decode_content(content: Any) -> str:
    """Turn the SDK's item content (bytes, str or a chunk iterator) into text.

    Bytes that are not valid UTF-8 become U+FFFD instead of failing.
    """
    if isinstance(content, bytes):
        return content.decode('utf-8', errors='replace')
    if isinstance(content, str):
        return content
    if content is None:
        return ''
    try:
        chunks = list(content)
    except TypeError:
        return '[Content not available in this format]'
    return b''.join(
        chunk if isinstance(chunk, bytes) else str(chunk).encode('utf-8') for chunk in chunks
    ).decode('utf-8', errors='replace')


def _slice(items: List[Any], skip: Optional[int] = None, top: Optional[int] = None) -> List[Any]:
    if skip and skip > 0:
        items = items[skip:]
    if top and top > 0:
        items = items[:top]
    return items


def pull_request_status_filter(status: Optional[str]) -> Optional[str]:
    """Map a status name to the search criteria value.

    ``all`` is passed through, known names get their canonical casing and
    anything else yields None (no status filter).
    """
    if status is None:
        return None
    if status.strip().lower() == 'all':
        return 'all'
    return PULL_REQUEST_STATUS.canonical_name(status)


def merge_strategy_name(merge_strategy: Optional[str]) -> str:
    return MERGE_STRATEGY.canonical_name(merge_strategy, default=DEFAULT_MERGE_STRATEGY)


class GitService(AzureDevOpsService):
    """Git repositories, branches, commits and pull requests."""

    def _git(self):
        return self._client('git')

    @remote_operation('listing repositories')
    def list_repositories(
        self,
        project_id: Optional[str] = None,
        include_hidden: Optional[bool] = None,
        include_all_urls: Optional[bool] = None,
    ):
        return self._git().get_repositories(
            project=self._project(project_id),
            include_all_urls=include_all_urls,
            include_hidden=include_hidden,
        )

    @remote_operation('getting repository')
    def get_repository(self, repository_id: str, project_id: Optional[str] = None):
        return self._git().get_repository(
            repository_id=repository_id, project=self._project(project_id)
        )

    @remote_operation('creating repository')
    def create_repository(self, name: str, project_id: Optional[str] = None):
        project = self._project(project_id)
        options = GitRepositoryCreateOptions(name=name, project=TeamProjectReference(id=project))
        return self._git().create_repository(git_repository_to_create=options, project=project)

    @remote_operation('listing branches')
    def list_branches(
        self,
        repository_id: str,
        name_filter: Optional[str] = None,
        top: Optional[int] = None,
        project_id: Optional[str] = None,
    ):
        branches = self._git().get_branches(
            repository_id=repository_id, project=self._project(project_id)
        ) or []
        if name_filter:
            needle = name_filter.lower()
            branches = [branch for branch in branches if needle in (branch.name or '').lower()]
        return _slice(branches, top=top)

    @remote_operation('searching code')
    def search_code(
        self,
        search_text: str,
        repository_id: Optional[str] = None,
        file_extension: Optional[str] = None,
        top: Optional[int] = None,
        project_id: Optional[str] = None,
    ):
        """Match repository item paths against ``search_text`` and ``file_extension``.

        This walks the item tree of one repository; full-text search needs the
        Search extension which is not available on every server.
        """
        items = self._git().get_items(
            repository_id=repository_id or '',
            project=self._project(project_id),
            recursion_level='Full',
            include_content_metadata=True,
        ) or []
        if search_text:
            needle = search_text.lower()
            items = [item for item in items if item.path and needle in item.path.lower()]
        if file_extension:
            items = [item for item in items if item.path and item.path.endswith(file_extension)]
        return _slice(items, top=top)

    @remote_operation('browsing repository')
    def browse_repository(
        self, repository_id: str, path: Optional[str] = None, project_id: Optional[str] = None
    ):
        return self._git().get_items(
            repository_id=repository_id,
            project=self._project(project_id),
            scope_path=path,
            recursion_level='OneLevel',
            include_content_metadata=True,
        )

    @remote_operation('getting file content')
    def get_file_content(
        self, repository_id: str, path: str, project_id: Optional[str] = None
    ) -> Dict[str, str]:
        content = self._git().get_item_content(
            repository_id=repository_id, path=path, project=self._project(project_id)
        )
        return {'content': _decode_content(content)}

    @remote_operation('getting commit history')
    def get_commit_history(
        self,
        repository_id: str,
        item_path: Optional[str] = None,
        skip: Optional[int] = None,
        top: Optional[int] = None,
        project_id: Optional[str] = None,
    ):
        criteria = GitQueryCommitsCriteria(item_path=item_path)
        commits = self._git().get_commits(
            repository_id=repository_id, search_criteria=criteria, project=self._project(project_id)
        ) or []
        return _slice(commits, skip=skip, top=top)

    @remote_operation('getting commits')
    def get_commits(
        self, repository_id: str, path: Optional[str] = None, project_id: Optional[str] = None
    ):
        criteria = GitQueryCommitsCriteria(item_path=path)
        return self._git().get_commits(
            repository_id=repository_id, search_criteria=criteria, project=self._project(project_id)
        )

    @remote_operation('getting pull requests')
    def get_pull_requests(
        self,
        repository_id: str,
        status: Optional[str] = None,
        creator_id: Optional[str] = None,
        reviewer_id: Optional[str] = None,
        source_ref_name: Optional[str] = None,
        target_ref_name: Optional[str] = None,
        project_id: Optional[str] = None,
    ):
        criteria = GitPullRequestSearchCriteria(
            repository_id=repository_id,
            creator_id=creator_id,
            reviewer_id=reviewer_id,
            source_ref_name=source_ref_name,
            target_ref_name=target_ref_name,
            status=pull_request_status_filter(status),
        )
        return self._git().get_pull_requests(
            repository_id=repository_id,
            search_criteria=criteria,
            project=self._project(project_id),
        )

    @remote_operation('creating pull request')
    def create_pull_request(
        self,
        repository_id: str,
        source_ref_name: str,
        target_ref_name: str,
        title: str,
        description: Optional[str] = None,
        reviewers: Optional[List[str]] = None,
    ):
        pull_request = GitPullRequest(
            source_ref_name=source_ref_name,
            target_ref_name=target_ref_name,
            title=title,
            description=description,
            reviewers=[IdentityRefWithVote(id=reviewer) for reviewer in reviewers]
            if reviewers
            else None,
        )
        return self._git().create_pull_request(
            git_pull_request_to_create=pull_request,
            repository_id=repository_id,
            project=self.config.project,
        )

    @remote_operation('getting pull request')
    def get_pull_request(self, repository_id: str, pull_request_id: int) -> Dict[str, Any]:
        """Return the pull request with ``status`` and ``merge_status`` as readable names."""
        pull_request = self._git().get_pull_request(
            repository_id=repository_id,
            pull_request_id=pull_request_id,
            project=self.config.project,
        )
        if not pull_request:
            raise PullRequestNotFoundError(pull_request_id, repository_id)
        data = pull_request.as_dict()
        data['status'] = PULL_REQUEST_STATUS.to_text(getattr(pull_request, 'status', None))
        data['merge_status'] = MERGE_STATUS.to_text(getattr(pull_request, 'merge_status', None))
        return data

    @remote_operation('getting pull request comments')
    def get_pull_request_comments(
        self, repository_id: str, pull_request_id: int, thread_id: Optional[int] = None
    ):
        git_client = self._git()
        validate_pull_request_repository(
            git_client, repository_id, pull_request_id, self.config.project
        )
        if thread_id:
            return git_client.get_pull_request_thread(
                repository_id=repository_id,
                pull_request_id=pull_request_id,
                thread_id=thread_id,
                project=self.config.project,
            )
        return git_client.get_threads(
            repository_id=repository_id,
            pull_request_id=pull_request_id,
            project=self.config.project,
        )

    @remote_operation('approving pull request')
    def approve_pull_request(self, repository_id: str, pull_request_id: int):
        git_client = self._git()
        validate_pull_request_repository(
            git_client, repository_id, pull_request_id, self.config.project
        )
        reviewer_id = self._client('identity').get_self().id
        return git_client.create_pull_request_reviewer(
            reviewer=IdentityRefWithVote(id=reviewer_id, vote=APPROVE_VOTE),
            repository_id=repository_id,
            pull_request_id=pull_request_id,
            reviewer_id=reviewer_id,
            project=self.config.project,
        )

    @remote_operation('merging pull request')
    def merge_pull_request(
        self, repository_id: str, pull_request_id: int, merge_strategy: Optional[str] = None
    ):
        git_client = self._git()
        pull_request = validate_pull_request_repository(
            git_client, repository_id, pull_request_id, self.config.project
        )
        update = GitPullRequest(
            status='completed',
            last_merge_source_commit=pull_request.last_merge_source_commit,
            completion_options=GitPullRequestCompletionOptions(
                merge_strategy=merge_strategy_name(merge_strategy)
            ),
        )
        return git_client.update_pull_request(
            git_pull_request_to_update=update,
            repository_id=repository_id,
            pull_request_id=pull_request_id,
            project=self.config.project,
        )

    @remote_operation('adding pull request comment')
    def add_pull_request_comment(
        self,
        repository_id: str,
        pull_request_id: int,
        content: str,
        thread_id: Optional[int] = None,
        parent_comment_id: Optional[int] = None,
        file_path: Optional[str] = None,
        line_number: Optional[int] = None,
        thread_context: Optional[Dict[str, Any]] = None,
    ):
        """Reply in an existing thread, or open a new thread.

        A new thread is attached to a file line when ``thread_context`` or both
        ``file_path`` and ``line_number`` are given.
        """
        git_client = self._git()
        validate_pull_request_repository(
            git_client, repository_id, pull_request_id, self.config.project
        )

        if thread_id:
            comment = Comment(
                content=content,
                parent_comment_id=parent_comment_id or 0,
                comment_type=COMMENT_TYPE.to_text(1),
            )
            return git_client.create_comment(
                comment=comment,
                repository_id=repository_id,
                pull_request_id=pull_request_id,
                thread_id=thread_id,
                project=self.config.project,
            )

        thread = GitPullRequestCommentThread(
            comments=[
                Comment(parent_comment_id=0, content=content, comment_type=COMMENT_TYPE.to_text(1))
            ],
            status=COMMENT_THREAD_STATUS.to_text(1),
        )
        if thread_context:
            thread.thread_context = CommentThreadContext.from_dict(thread_context)
        elif file_path and line_number:
            thread.thread_context = CommentThreadContext(
                file_path=file_path,
                right_file_start=CommentPosition(line=line_number, offset=LINE_START_OFFSET),
                right_file_end=CommentPosition(line=line_number, offset=LINE_END_OFFSET),
            )
        return git_client.create_thread(
            comment_thread=thread,
            repository_id=repository_id,
            pull_request_id=pull_request_id,
            project=self.config.project,
        )

    @remote_operation('completing pull request')
    def complete_pull_request(
        self,
        repository_id: str,
        pull_request_id: int,
        merge_strategy: Optional[str] = None,
        delete_source_branch: Optional[bool] = None,
    ):
        git_client = self._git()
        pull_request = validate_pull_request_repository(
            git_client, repository_id, pull_request_id, self.config.project
        )
        update = GitPullRequest(
            status='completed',
            last_merge_source_commit=pull_request.last_merge_source_commit,
            completion_options=GitPullRequestCompletionOptions(
                merge_strategy=merge_strategy_name(merge_strategy),
                delete_source_branch=delete_source_branch,
            ),
        )
        return git_client.update_pull_request(
            git_pull_request_to_update=update,
            repository_id=repository_id,
            pull_request_id=pull_request_id,
            project=self.config.project,
        )
