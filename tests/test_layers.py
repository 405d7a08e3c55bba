"""
Layer policy tests
"""
import pytest

from app_service.di import CompositionRoot, LayerPolicy, LayeringViolation
from app_service.di.layers import layer_of
from tests.fixtures.hexagon.adapters.controller import ArchiveControllerService
from tests.fixtures.hexagon.adapters.s3 import S3StorageService
from tests.fixtures.hexagon.ports import Archiver


class TestLayerOf:

    @pytest.mark.parametrize(
        "module_path, layer",
        [
            ("app_service.domain.models.order", "domain"),
            ("app_service.ports.outbound.storage", "ports"),
            ("app_service.application.use_cases.place_order", "application"),
            ("app_service.adapters.driven.s3", "adapters"),
            ("app_service.core.config", None),
            ("tests.fixtures.ordering.order_case", None),
        ],
    )
    def test_layer_of(self, module_path, layer):
        assert layer_of(module_path) == layer


class TestLayerPolicy:

    def test_application_depending_on_adapter_is_rejected(self):
        root = CompositionRoot(["tests.fixtures.layered"], layer_policy=LayerPolicy())

        with pytest.raises(LayeringViolation) as exc_info:
            root.compose()

        error = exc_info.value
        assert error.component == "tests.fixtures.layered.application.archive.ArchiveCase"
        assert error.parameter == "storage"
        assert error.layer == "application"
        assert error.dependency_layer == "adapters"
        assert "S3StorageService" in str(error)

    def test_violation_is_ignored_without_policy(self):
        root = CompositionRoot(["tests.fixtures.layered"]).compose()

        assert root.is_ready

    def test_dependencies_through_ports_are_accepted(self):
        root = CompositionRoot(["tests.fixtures.hexagon"], layer_policy=LayerPolicy()).compose()

        controller = root.resolve(ArchiveControllerService)
        assert controller.handle("report.pdf") == "report.pdf"
        assert root.resolve(S3StorageService).objects == {"report.pdf": b"archived"}
        assert controller.archiver is root.resolve(Archiver)

    def test_custom_rules(self):
        strict = LayerPolicy({"adapters": frozenset({"adapters"})})
        root = CompositionRoot(["tests.fixtures.hexagon"], layer_policy=strict)

        with pytest.raises(LayeringViolation, match="ArchiveControllerService"):
            root.compose()
