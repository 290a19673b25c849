
import nox

extras = ('', '[tests]')

@nox.session
@nox.parametrize('extra', extras)
def build(session, extra):
    """Checks build for all supported Python versions and extras and optionally runs tests."""
    session.install(f'.{extra}')
    if extra == '[tests]':
        session.run('pip', 'list')
        session.run('pytest', 'tests')
