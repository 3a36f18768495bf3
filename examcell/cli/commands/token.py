"""Issue development access tokens signed with the configured secret."""

import cyclopts

from examcell.cli.console import get_console
from examcell.config import Config
from examcell.domain.auth.model.role import Role
from examcell.domain.auth.service.token import TokenService

app = cyclopts.App(name="token", help="Development access tokens")


@app.default
def issue(
    subject: str,
    role: Role | None = None,
    department: str | None = None,
    expires_minutes: int = 60,
) -> None:
    """Print a bearer token for `subject` (an identity-provider user id).

    Args:
        subject: Value of the `sub` claim.
        role: Role claim. Omit to use the staff directory's role.
        department: Department claim.
        expires_minutes: Token lifetime.
    """
    console = get_console()
    config = Config()  # type: ignore[call-arg]
    if not config.auth.jwt.secret:
        console.error("auth.jwt.secret is not configured", hint="Set EXAMCELL_AUTH__JWT__SECRET")
        raise SystemExit(1)

    service = TokenService(_config=config.auth.jwt)
    console.print(
        service.create_access_token(subject, role, department, expires_minutes), soft_wrap=True
    )
