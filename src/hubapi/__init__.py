"""hubapi -- request-dispatch core for REST API client libraries.

Concrete API classes subclass :class:`API` and define request methods.
Every request method runs through a before/after hook pipeline, and every
client carries its own configuration that flows into namespaced
sub-clients::

    from hubapi import API, Namespace, before_request

    class Repos(API):
        commits = Namespace()

        @before_request()
        def require_scope(self):
            ...

        def get(self, *args, **params):
            arguments = self.arguments(args, params, required=["user", "repo"])
            return self.get_request(f"/repos/{arguments.user}/{arguments.repo}")

    repos = Repos().with_("octocat/hello-world")
    repos.get()

Modules:
    api: The root :class:`API` class, metaclass, namespaces, arguments.
    hooks: Callback descriptors, registries and the hook runner.
    models: Pydantic models shared across the package.
    configuration: Library-wide defaults and environment overrides.
    client: httpx-based transport and response wrapper.
    auth: Credential resolution.
    exceptions: Exception hierarchy.
    output: stderr diagnostics.
"""

__version__ = "0.1.0"

from hubapi.api import API, Arguments, Factory, Namespace, helper  # noqa: E402
from hubapi.configuration import configure, reset_configuration  # noqa: E402
from hubapi.hooks import after_request, before_request  # noqa: E402

__all__ = [
    "API",
    "Arguments",
    "Factory",
    "Namespace",
    "after_request",
    "before_request",
    "configure",
    "helper",
    "reset_configuration",
]
