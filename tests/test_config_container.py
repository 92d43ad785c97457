"""Tests for settings and the dependency-injection container."""

import pytest
from pydantic import ValidationError

from flowpulse.adapters.rendering import FoliumFlowMapRenderer
from flowpulse.adapters.repair import ValidatingRepair, WesternHemisphereRepair
from flowpulse.adapters.source import FileTableSource
from flowpulse.config import AppConfig, PipelineConfig, get_config
from flowpulse.container import Container, get_container, reset_container
from flowpulse.ports import CoordinateRepairPort, FlowMapRendererPort, TableSourcePort
from flowpulse.services import FlowDashboardService


def test_defaults():
    config = get_config()
    assert config.pipeline.default_top_n == 50
    assert config.pipeline.top_n_choices == (50, 100, 200)
    assert config.pipeline.min_weight == 0.8
    assert config.pipeline.max_weight == 14.0
    assert config.repair.policy == "western_hemisphere"
    assert config.source.data_path.name == "sample_flows.csv"
    assert config.rendering.bounds == [[24.0, -126.0], [50.0, -66.0]]


def test_get_config_is_cached():
    assert get_config() is get_config()


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("FP_PIPELINE_DEFAULT_TOP_N", "100")
    monkeypatch.setenv("FP_REPAIR_POLICY", "validate_only")
    monkeypatch.setenv("FP_SOURCE_DATA_DIR", str(tmp_path))

    config = AppConfig()
    assert config.pipeline.default_top_n == 100
    assert config.repair.policy == "validate_only"
    assert config.source.data_dir == tmp_path


def test_invalid_pipeline_settings_rejected():
    with pytest.raises(ValidationError):
        PipelineConfig(default_top_n=75)
    with pytest.raises(ValidationError):
        PipelineConfig(min_weight=5.0, max_weight=1.0)
    with pytest.raises(ValidationError):
        PipelineConfig(top_n_choices=(0, 50), default_top_n=50)


def test_default_container_bindings():
    container = Container.create_default(AppConfig())

    assert isinstance(container.resolve(TableSourcePort), FileTableSource)
    assert isinstance(container.resolve(CoordinateRepairPort), WesternHemisphereRepair)
    assert isinstance(container.resolve(FlowMapRendererPort), FoliumFlowMapRenderer)

    service = container.resolve(FlowDashboardService)
    assert isinstance(service, FlowDashboardService)
    assert service is container.resolve(FlowDashboardService)


def test_container_service_writes_to_configured_output(monkeypatch, tmp_path):
    monkeypatch.setenv("FP_OUTPUT_DIR", str(tmp_path))
    monkeypatch.setenv("FP_MAP_OUTPUT_FILE", "od.html")

    service = Container.create_default(AppConfig()).resolve(FlowDashboardService)
    assert service.default_output_path == tmp_path / "od.html"


def test_repair_policy_from_config(monkeypatch):
    monkeypatch.setenv("FP_REPAIR_POLICY", "validate_only")
    container = Container.create_default(AppConfig())

    repair = container.resolve(CoordinateRepairPort)
    assert type(repair) is ValidatingRepair


def test_register_overrides_and_transients():
    container = Container(config=AppConfig())
    container.register(TableSourcePort, lambda: object(), singleton=False)

    assert container.is_registered(TableSourcePort)
    assert container.resolve(TableSourcePort) is not container.resolve(TableSourcePort)

    with pytest.raises(KeyError):
        container.resolve(FlowMapRendererPort)

    container.clear_all()
    assert not container.is_registered(TableSourcePort)


def test_global_container_reset():
    first = get_container()
    assert get_container() is first
    reset_container()
    assert get_container() is not first
