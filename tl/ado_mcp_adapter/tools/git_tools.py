from tl.ado_mcp_adapter.catalog import GIT_TOOLS
from tl.ado_mcp_adapter.models import ADOToolResponse
from tl.ado_mcp_adapter.tools.base import ToolGroup
from typing import Any, Dict, List, Optional


class GitTools(ToolGroup):
    """Repository, branch, commit and pull request tools."""

    tools = GIT_TOOLS

    def list_repositories(
        self,
        project_id: Optional[str] = None,
        include_hidden: Optional[bool] = False,
        include_all_urls: Optional[bool] = False,
    ) -> ADOToolResponse:
        """List all repositories in a project.

        Args:
            project_id: Project name or ID, defaults to the configured project
            include_hidden: Whether to include hidden repositories
            include_all_urls: Whether to include all remote URLs
        """
        return self._respond(
            'Retrieved repositories',
            self.service.list_repositories,
            project_id=project_id,
            include_hidden=include_hidden,
            include_all_urls=include_all_urls,
        )

    def get_repository(self, repository_id: str, project_id: Optional[str] = None) -> ADOToolResponse:
        """Get details of a repository.

        Args:
            repository_id: Repository name or ID
            project_id: Project name or ID, defaults to the configured project
        """
        return self._respond(
            f'Retrieved repository {repository_id}',
            self.service.get_repository,
            repository_id=repository_id,
            project_id=project_id,
        )

    def create_repository(self, name: str, project_id: Optional[str] = None) -> ADOToolResponse:
        """Create a new Git repository.

        Args:
            name: Name of the new repository
            project_id: Project name or ID, defaults to the configured project
        """
        return self._respond(
            f'Created repository {name}',
            self.service.create_repository,
            name=name,
            project_id=project_id,
        )

    def list_branches(
        self, repository_id: str, filter: Optional[str] = None, top: Optional[int] = None
    ) -> ADOToolResponse:
        """List branches of a repository.

        Args:
            repository_id: Repository name or ID
            filter: Only return branches whose name contains this text
            top: Maximum number of branches to return
        """
        return self._respond(
            f'Retrieved branches of repository {repository_id}',
            self.service.list_branches,
            repository_id=repository_id,
            name_filter=filter,
            top=top,
        )

    def search_code(
        self,
        search_text: str,
        repository_id: Optional[str] = None,
        file_extension: Optional[str] = None,
        top: Optional[int] = None,
    ) -> ADOToolResponse:
        """Search repository items whose path contains the search text.

        Args:
            search_text: Text to look for in item paths
            repository_id: Repository name or ID
            file_extension: Only return items ending with this extension, e.g. '.py'
            top: Maximum number of items to return
        """
        return self._respond(
            f'Searched code for "{search_text}"',
            self.service.search_code,
            search_text=search_text,
            repository_id=repository_id,
            file_extension=file_extension,
            top=top,
        )

    def browse_repository(self, repository_id: str, path: Optional[str] = None) -> ADOToolResponse:
        """List items directly under a path of a repository.

        Args:
            repository_id: Repository name or ID
            path: Folder path, the repository root when omitted
        """
        return self._respond(
            f'Browsed repository {repository_id}',
            self.service.browse_repository,
            repository_id=repository_id,
            path=path,
        )

    def get_file_content(self, repository_id: str, path: str) -> ADOToolResponse:
        """Get the content of a file.

        Args:
            repository_id: Repository name or ID
            path: Path of the file within the repository
        """
        return self._respond(
            f'Retrieved content of {path}',
            self.service.get_file_content,
            repository_id=repository_id,
            path=path,
        )

    def get_commit_history(
        self,
        repository_id: str,
        item_path: Optional[str] = None,
        skip: Optional[int] = None,
        top: Optional[int] = None,
    ) -> ADOToolResponse:
        """Get the commit history of a repository.

        Args:
            repository_id: Repository name or ID
            item_path: Only include commits touching this path
            skip: Number of commits to skip
            top: Maximum number of commits to return
        """
        return self._respond(
            f'Retrieved commit history of repository {repository_id}',
            self.service.get_commit_history,
            repository_id=repository_id,
            item_path=item_path,
            skip=skip,
            top=top,
        )

    def get_commits(self, repository_id: str, path: Optional[str] = None) -> ADOToolResponse:
        """Get commits of a repository.

        Args:
            repository_id: Repository name or ID
            path: Only include commits touching this path
        """
        return self._respond(
            f'Retrieved commits of repository {repository_id}',
            self.service.get_commits,
            repository_id=repository_id,
            path=path,
        )

    def get_pull_requests(
        self,
        repository_id: str,
        status: Optional[str] = None,
        creator_id: Optional[str] = None,
        reviewer_id: Optional[str] = None,
        source_ref_name: Optional[str] = None,
        target_ref_name: Optional[str] = None,
    ) -> ADOToolResponse:
        """List pull requests of a repository.

        Args:
            repository_id: Repository name or ID
            status: One of active, abandoned, completed, notSet or all
            creator_id: Only pull requests created by this identity
            reviewer_id: Only pull requests reviewed by this identity
            source_ref_name: Source branch, e.g. refs/heads/feature
            target_ref_name: Target branch, e.g. refs/heads/main
        """
        return self._respond(
            f'Retrieved pull requests of repository {repository_id}',
            self.service.get_pull_requests,
            repository_id=repository_id,
            status=status,
            creator_id=creator_id,
            reviewer_id=reviewer_id,
            source_ref_name=source_ref_name,
            target_ref_name=target_ref_name,
        )

    def create_pull_request(
        self,
        repository_id: str,
        source_ref_name: str,
        target_ref_name: str,
        title: str,
        description: Optional[str] = None,
        reviewers: Optional[List[str]] = None,
    ) -> ADOToolResponse:
        """Create a new pull request.

        Args:
            repository_id: Repository name or ID
            source_ref_name: Source branch, e.g. refs/heads/feature
            target_ref_name: Target branch, e.g. refs/heads/main
            title: Title of the pull request
            description: Description of the pull request
            reviewers: Identity IDs of the reviewers
        """
        return self._respond(
            f'Created pull request "{title}"',
            self.service.create_pull_request,
            repository_id=repository_id,
            source_ref_name=source_ref_name,
            target_ref_name=target_ref_name,
            title=title,
            description=description,
            reviewers=reviewers,
        )

    def get_pull_request(self, repository_id: str, pull_request_id: int) -> ADOToolResponse:
        """Get a pull request, with status and merge status as readable names.

        Args:
            repository_id: Repository name or ID
            pull_request_id: ID of the pull request
        """
        return self._respond(
            f'Retrieved pull request {pull_request_id}',
            self.service.get_pull_request,
            repository_id=repository_id,
            pull_request_id=pull_request_id,
        )

    def get_pull_request_comments(
        self, repository_id: str, pull_request_id: int, thread_id: Optional[int] = None
    ) -> ADOToolResponse:
        """Get comment threads of a pull request.

        Args:
            repository_id: Repository name or ID
            pull_request_id: ID of the pull request
            thread_id: Only return this thread
        """
        return self._respond(
            f'Retrieved comments of pull request {pull_request_id}',
            self.service.get_pull_request_comments,
            repository_id=repository_id,
            pull_request_id=pull_request_id,
            thread_id=thread_id,
        )

    def approve_pull_request(self, repository_id: str, pull_request_id: int) -> ADOToolResponse:
        """Approve a pull request as the authenticated user.

        Args:
            repository_id: Repository name or ID
            pull_request_id: ID of the pull request
        """
        return self._respond(
            f'Approved pull request {pull_request_id}',
            self.service.approve_pull_request,
            repository_id=repository_id,
            pull_request_id=pull_request_id,
        )

    def merge_pull_request(
        self, repository_id: str, pull_request_id: int, merge_strategy: Optional[str] = None
    ) -> ADOToolResponse:
        """Merge a pull request.

        Args:
            repository_id: Repository name or ID
            pull_request_id: ID of the pull request
            merge_strategy: noFastForward (default), rebase, rebaseMerge or squash
        """
        return self._respond(
            f'Merged pull request {pull_request_id}',
            self.service.merge_pull_request,
            repository_id=repository_id,
            pull_request_id=pull_request_id,
            merge_strategy=merge_strategy,
        )

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
    ) -> ADOToolResponse:
        """Add a comment to a pull request.

        Args:
            repository_id: Repository name or ID
            pull_request_id: ID of the pull request
            content: Comment text
            thread_id: Reply in this thread instead of opening a new one
            parent_comment_id: Comment being replied to within the thread
            file_path: File the new thread is attached to
            line_number: Line of the file the new thread is attached to
            thread_context: Raw thread context, overrides file_path and line_number
        """
        return self._respond(
            f'Added comment to pull request {pull_request_id}',
            self.service.add_pull_request_comment,
            repository_id=repository_id,
            pull_request_id=pull_request_id,
            content=content,
            thread_id=thread_id,
            parent_comment_id=parent_comment_id,
            file_path=file_path,
            line_number=line_number,
            thread_context=thread_context,
        )

    def complete_pull_request(
        self,
        repository_id: str,
        pull_request_id: int,
        merge_strategy: Optional[str] = None,
        delete_source_branch: Optional[bool] = False,
    ) -> ADOToolResponse:
        """Complete a pull request.

        Args:
            repository_id: Repository name or ID
            pull_request_id: ID of the pull request
            merge_strategy: noFastForward (default), rebase, rebaseMerge or squash
            delete_source_branch: Whether to delete the source branch afterwards
        """
        return self._respond(
            f'Completed pull request {pull_request_id}',
            self.service.complete_pull_request,
            repository_id=repository_id,
            pull_request_id=pull_request_id,
            merge_strategy=merge_strategy,
            delete_source_branch=delete_source_branch,
        )
