"""External service clients.

- ``base_client.BaseGraphQLClient``: executes single GraphQL operations.
- ``github_client.GitHubGraphQLClient``: GitHub operations and pagination.
"""
