from pyquads.version import version


def test_version():
    assert isinstance(version(), str)
    assert len(version()) > 0
