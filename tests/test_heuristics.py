"""Tests for the name-based class/method descriptions and naming verdicts."""

import pytest

from cs_inspector.src.cs_inspector.heuristics import (
    GENERIC_CLASS_ROLE,
    GENERIC_METHOD_DESCRIPTION,
    NamingVerdict,
    describe_class,
    describe_method,
    naming_verdict,
)
from cs_inspector.src.cs_inspector.models.ast_models import Parameter


class TestDescribeClass:
    def test_service_beats_controller(self):
        """'ServiceController' matches two rules; service comes first."""
        assert describe_class("ServiceController") == describe_class("OrderService")
        assert describe_class("ServiceController") != describe_class("HomeController")

    @pytest.mark.parametrize("name,needle", [
        ("UserService", "serviços"),
        ("HomeController", "entrada e saída"),
        ("OrderRepository", "persistência"),
        ("DbHealthCheck", "integridade"),
    ])
    def test_each_role(self, name, needle):
        assert needle in describe_class(name)

    def test_case_insensitive(self):
        assert describe_class("MYSERVICE") == describe_class("myservice")

    def test_fallback(self):
        assert describe_class("Calculator") == GENERIC_CLASS_ROLE


class TestDescribeMethod:
    def test_verb_rules_in_order(self):
        # "GetSettings" contains both "get" and "set"; "get" is checked first
        assert describe_method("GetSettings", ()) == "Obtém informações ou dados de uma fonte."
        assert describe_method("ResetCounter", ()).startswith("Define")
        assert describe_method("CheckStock", ()).startswith("Verifica")
        assert describe_method("SaveAll", ()).startswith("Salva")
        assert describe_method("UpdatePrice", ()).startswith("Atualiza")
        assert describe_method("DeleteUser", ()).startswith("Remove")

    def test_verb_wins_over_parameters(self):
        assert describe_method("GetTotal", (Parameter("Order", "o"),)).startswith("Obtém")

    def test_first_matching_parameter_wins(self):
        params = (Parameter("int", "id"), Parameter("Customer", "c"), Parameter("Order", "o"))
        assert describe_method("Process", params) == "Gerencia ou processa dados de clientes."

    def test_invoice_and_payment_share_outcome(self):
        a = describe_method("Handle", (Parameter("InvoiceDto", "i"),))
        b = describe_method("Handle", (Parameter("PaymentInfo", "p"),))
        assert a == b == "Gerencia transações financeiras ou faturas."

    def test_product_parameter(self):
        assert describe_method("Publish", (Parameter("List<Product>", "items"),)).startswith("Manipula")

    def test_fallback(self):
        assert describe_method("Run", (Parameter("int", "n"),)) == GENERIC_METHOD_DESCRIPTION


class TestNamingVerdict:
    def test_lower_camel_case_warns(self):
        assert naming_verdict("getValue") is NamingVerdict.WARNING

    def test_pascal_case_compliant(self):
        assert naming_verdict("GetValue") is NamingVerdict.COMPLIANT

    def test_leading_underscore_warns(self):
        assert naming_verdict("_Helper") is NamingVerdict.WARNING

    def test_empty_name_is_an_error(self):
        with pytest.raises(ValueError):
            naming_verdict("")
