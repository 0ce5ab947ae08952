# --- Name-based heuristics ---------------------------------------------------
"""
Canned descriptions guessed from identifier text alone.

Every rule is a case-insensitive substring test, checked in a fixed order;
the first rule that matches wins. Nothing here looks at semantics, so the
answers are best-effort by construction.
"""
from enum import Enum
from typing import Iterable

from cs_inspector.src.cs_inspector.models.ast_models import Parameter

CLASS_ROLES: tuple[tuple[str, str], ...] = (
    ("service", "Gerencia operações relacionadas a serviços."),
    ("controller", "Controla a lógica de entrada e saída de uma aplicação."),
    ("repository", "Gerencia o acesso aos dados e repositórios de persistência."),
    ("healthcheck", "Realiza verificações de integridade e estado do sistema."),
)
GENERIC_CLASS_ROLE = "Classe com funcionalidades específicas dentro do projeto."

METHOD_VERBS: tuple[tuple[str, str], ...] = (
    ("get", "Obtém informações ou dados de uma fonte."),
    ("set", "Define ou atualiza valores de parâmetros ou propriedades."),
    ("check", "Verifica uma condição ou estado, retornando o resultado."),
    ("save", "Salva informações ou dados no sistema."),
    ("update", "Atualiza dados ou parâmetros existentes."),
    ("delete", "Remove ou exclui dados de uma fonte."),
)

# A rule matches when any of its substrings occurs in the parameter type.
PARAMETER_DOMAINS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("order",), "Processa operações relacionadas a pedidos."),
    (("customer",), "Gerencia ou processa dados de clientes."),
    (("product",), "Manipula informações de produtos."),
    (("invoice", "payment"), "Gerencia transações financeiras ou faturas."),
)
GENERIC_METHOD_DESCRIPTION = "Executa uma lógica específica de negócio."


class NamingVerdict(str, Enum):
    COMPLIANT = "compliant"
    WARNING = "warning"


def describe_class(class_name: str) -> str:
    """Role sentence for a class, e.g. "OrderService" -> the service sentence."""
    lowered = class_name.lower()
    for needle, sentence in CLASS_ROLES:
        if needle in lowered:
            return sentence
    return GENERIC_CLASS_ROLE


def describe_method(method_name: str, params: Iterable[Parameter]) -> str:
    """
    Verb rules on the method name come first. Only when none of them match do we
    look at parameter types, in declaration order; the first parameter that
    matches any domain rule decides.
    """
    lowered = method_name.lower()
    for needle, sentence in METHOD_VERBS:
        if needle in lowered:
            return sentence

    for param in params:
        param_type = param.type_text.lower()
        for needles, sentence in PARAMETER_DOMAINS:
            if any(n in param_type for n in needles):
                return sentence

    return GENERIC_METHOD_DESCRIPTION


def naming_verdict(method_name: str) -> NamingVerdict:
    """C# methods are PascalCase: anything not starting upper-case gets a warning."""
    if not method_name:
        raise ValueError("method name must not be empty")
    return NamingVerdict.COMPLIANT if method_name[0].isupper() else NamingVerdict.WARNING
