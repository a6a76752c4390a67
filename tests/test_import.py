"""Basic import tests to verify package structure."""


def test_import_desirepaths():
    """Verify main package imports."""
    import desirepaths
    assert desirepaths.__version__ == "0.1.0"


def test_import_core():
    """Verify core module structure exists."""
    from desirepaths import core
    assert hasattr(core, "__doc__")
    assert hasattr(core, "Sim")


def test_import_analysis():
    """Verify analysis module structure exists."""
    from desirepaths import analysis
    assert hasattr(analysis, "__doc__")


def test_import_viz():
    """Verify viz module structure exists."""
    from desirepaths import viz
    assert hasattr(viz, "plot_network")
