"""
Component scanner tests
"""
import pytest

from app_service.di import (
    AmbiguousCapability,
    ComponentKind,
    ComponentScanner,
    NamePatternRule,
    ScanConfigurationError,
    UnresolvedCapability,
    scan,
)
from app_service.di.scanner import is_port
from tests.fixtures.ordering.billing import InvoiceService
from tests.fixtures.ordering.order_case import OrderCase
from tests.fixtures.ordering.order_helper import OrderHelper
from tests.fixtures.ordering.ports import Helper, Invoicer, Placer, PricingService
from tests.fixtures.payments.ports import Payer
from tests.fixtures.reporting.exporters import CsvExporterService, Exporter, ReportService
from tests.fixtures.wiring.clock import SystemClockService
from tests.fixtures.wiring.ports import Clock, Notifier

ORDERING = "tests.fixtures.ordering"


def names(registry):
    return [descriptor.qualified_name for descriptor in registry]


class TestScan:

    def test_only_matching_classes_are_registered(self):
        registry = scan({ORDERING}, NamePatternRule.from_suffixes({"Case", "Service"}))

        assert names(registry) == [
            "tests.fixtures.ordering.billing.InvoiceService",
            "tests.fixtures.ordering.order_case.OrderCase",
        ]
        assert OrderHelper not in registry
        assert Helper not in registry

    def test_scan_is_deterministic(self):
        first = scan([ORDERING])
        second = scan([ORDERING])

        assert names(first) == names(second)
        assert first.capabilities == second.capabilities

    def test_namespace_order_does_not_change_result(self):
        first = scan([ORDERING, "tests.fixtures.wiring"])
        second = scan(["tests.fixtures.wiring", ORDERING])

        assert names(first) == names(second)
        assert names(first) == sorted(names(first))

    def test_overlapping_namespaces_are_collapsed(self):
        registry = scan([ORDERING, f"{ORDERING}.order_case"])

        assert names(registry).count("tests.fixtures.ordering.order_case.OrderCase") == 1

    def test_single_module_namespace(self):
        registry = scan(f"{ORDERING}.order_case")

        assert names(registry) == ["tests.fixtures.ordering.order_case.OrderCase"]

    def test_capabilities_include_port_and_own_class(self):
        registry = scan([ORDERING])

        descriptor = registry.implementations_of(Placer)[0]
        assert descriptor.component_class is OrderCase
        assert descriptor.capabilities == (Placer, OrderCase)
        assert registry.implementations_of(OrderCase) == (descriptor,)
        assert registry.implementations_of(Invoicer)[0].component_class is InvoiceService

    def test_descriptor_fields(self):
        registry = scan([ORDERING])
        descriptor = registry.implementations_of(Placer)[0]

        assert descriptor.namespace == "tests.fixtures.ordering.order_case"
        assert descriptor.name == "OrderCase"
        assert descriptor.kind is ComponentKind.USE_CASE
        assert descriptor.provides(Placer)
        assert not descriptor.provides(Helper)
        assert registry.implementations_of(Invoicer)[0].kind is ComponentKind.SERVICE

    def test_abstract_ports_are_never_discovered(self):
        registry = scan([ORDERING])

        assert PricingService not in registry
        assert all(not is_port(descriptor.component_class) for descriptor in registry)

    def test_concrete_class_declaring_abc_is_discovered(self):
        registry = scan(["tests.fixtures.reporting"])

        assert names(registry) == [
            "tests.fixtures.reporting.exporters.CsvExporterService",
            "tests.fixtures.reporting.exporters.ReportService",
        ]
        assert registry.implementations_of(ReportService)[0].capabilities == (ReportService,)
        assert registry.implementations_of(Exporter)[0].component_class is CsvExporterService
        assert not is_port(ReportService)

    def test_excluded_ports_are_logged(self, caplog):
        with caplog.at_level("DEBUG", logger="app_service.di.scanner"):
            scan([ORDERING])

        assert "tests.fixtures.ordering.ports.PricingService: abstract class or Protocol" in caplog.text

    def test_private_classes_are_skipped(self):
        registry = scan([ORDERING])

        assert "tests.fixtures.ordering.billing._PrivateService" not in names(registry)
        assert len(registry.implementations_of(Invoicer)) == 1

    def test_imported_classes_are_not_attributed_to_importing_module(self):
        registry = scan([ORDERING])

        assert all(descriptor.namespace == descriptor.component_class.__module__ for descriptor in registry)

    def test_implements_marker_declares_structural_capability(self):
        registry = scan(["tests.fixtures.wiring"])

        descriptor = registry.implementations_of(Clock)[0]
        assert descriptor.component_class is SystemClockService
        assert descriptor.capabilities == (Clock, SystemClockService)

    def test_multi_binding_port_keeps_discovery_order(self):
        registry = scan(["tests.fixtures.wiring"])

        assert [d.name for d in registry.implementations_of(Notifier)] == [
            "EmailNotifierService",
            "SmsNotifierService",
        ]

    def test_registry_is_read_only(self):
        registry = scan([ORDERING])

        with pytest.raises(TypeError):
            registry.as_mapping()[Helper] = ()


class TestScanFailures:

    def test_ambiguous_capability_fails_the_scan(self):
        with pytest.raises(AmbiguousCapability) as exc_info:
            scan({"tests.fixtures.payments"}, NamePatternRule.from_suffixes({"Case", "Service"}))

        error = exc_info.value
        assert error.capability is Payer
        assert "Payer" in str(error)
        assert error.candidates == (
            "tests.fixtures.payments.pay_case.PayCase",
            "tests.fixtures.payments.pay_service.PayService",
        )
        assert error.namespaces == ("tests.fixtures.payments",)
        assert isinstance(error, UnresolvedCapability.Ambiguous)

    def test_narrower_pattern_removes_the_ambiguity(self):
        registry = scan({"tests.fixtures.payments"}, NamePatternRule.from_suffixes({"Case"}))

        assert [d.name for d in registry.implementations_of(Payer)] == ["PayCase"]

    @pytest.mark.parametrize("namespaces", [set(), [], ["", "  "]])
    def test_empty_namespaces_rejected(self, namespaces):
        with pytest.raises(ScanConfigurationError):
            scan(namespaces)

    def test_unknown_namespace_rejected(self):
        with pytest.raises(ScanConfigurationError, match="tests.fixtures.nowhere"):
            scan(["tests.fixtures.nowhere"])

    def test_module_failing_to_import_aborts_scan(self):
        with pytest.raises(ScanConfigurationError, match="bad_module"):
            ComponentScanner().scan(["tests.fixtures.broken"])
