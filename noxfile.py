import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]


def _install(session: nox.Session) -> None:
    """Install the project with the test extra into the nox virtualenv."""
    session.run("poetry", "install", "--all-extras", external=True)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the full test suite against the in-memory providers."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Run aggregate, identifier and BDD tests only."""
    _install(session)
    session.run(
        "pytest",
        "tests/shared/",
        "tests/catalogue/domain/",
        "tests/catalogue/bdd/",
        "tests/ordering/domain/",
        "tests/ordering/bdd/",
    )
