import json
import os
from dataclasses import asdict
from typing import Callable

from cs_inspector.src.cs_inspector.models.findings import (
    Assignment,
    BinaryComputation,
    Conditional,
    DoWhileLoop,
    ForLoop,
    Invocation,
    NoDependencies,
    QueryLiteral,
    StatementClassification,
    StatementKind,
    TryCatch,
    Unrecognized,
    WhileLoop,
)
from cs_inspector.src.cs_inspector.models.report_models import ClassReport, FileReport, MethodReport

NO_DEPENDENCIES_LINE = "(Sem dependências)"


def _one_line(text: str) -> str:
    return " ".join(text.split())


# --- Finding renderers -------------------------------------------------------

def _render_for(f: ForLoop) -> list[str]:
    lines = [f"Contém um loop 'for' com condição: {_one_line(f.condition)}"]
    lines += [f"  Inicializador: {_one_line(i)}" for i in f.initializers]
    lines += [f"  Incremento: {_one_line(i)}" for i in f.incrementors]
    return lines


def _render_while(f: WhileLoop) -> list[str]:
    return [f"Contém um loop 'while' com condição: {_one_line(f.condition)}"]


def _render_do_while(f: DoWhileLoop) -> list[str]:
    return [f"Contém um loop 'do-while' com condição: {_one_line(f.condition)}"]


def _render_conditional(f: Conditional) -> list[str]:
    lines = [f"Contém uma condição 'if': {_one_line(f.condition)}"]
    lines += [f"  Se verdadeiro: {_one_line(s)}" for s in f.then_statements]
    if f.has_else:
        lines.append("  Bloco 'else' detectado")
        lines += [f"  Senão: {_one_line(s)}" for s in f.else_statements]
    return lines


def _render_try(f: TryCatch) -> list[str]:
    lines = ["Contém um bloco 'try-catch'"]
    lines += [f"  Try: {_one_line(s)}" for s in f.try_statements]
    for clause in f.catches:
        if clause.exception_type:
            lines.append(f"  Captura exceção: {clause.exception_type}")
        else:
            lines.append("  Captura qualquer exceção")
        lines += [f"    Catch: {_one_line(s)}" for s in clause.statements]
    if f.finally_statements is not None:
        lines.append("  Bloco 'finally' detectado")
        lines += [f"    Finally: {_one_line(s)}" for s in f.finally_statements]
    return lines


def _render_invocation(f: Invocation) -> list[str]:
    lines = [f"Chama o método: {_one_line(f.callee)}"]
    if f.http_call:
        lines.append("  Dependência externa: chamada HTTP detectada")
    if f.sql_call:
        lines.append("  Dependência externa: comando SQL detectado")
    for arg in f.arguments:
        lines.append(f"  Argumento: {_one_line(arg.text)}")
        if arg.tracked:
            lines.append(f"  Usa a variável rastreada '{arg.tracked.name}' = {_one_line(arg.tracked.value)}")
    return lines


def _render_binary(f: BinaryComputation) -> list[str]:
    lines = [f"Cálculo: {_one_line(f.left)} {f.operator} {_one_line(f.right)}"]
    if f.left_call is not None:
        lines.append(f"  Operando esquerdo é uma chamada: {_one_line(f.left_call)}")
    if f.right_call is not None:
        lines.append(f"  Operando direito é uma chamada: {_one_line(f.right_call)}")
    if f.tracked:
        lines.append(f"  Usa a variável rastreada '{f.tracked.name}' no cálculo")
    return lines


def _render_assignment(f: Assignment) -> list[str]:
    lines = [f"Atribuição: {f.name} {f.operator} {_one_line(f.value)}"]
    if f.computation is not None:
        lines += ["  " + line for line in _render_binary(f.computation)]
    return lines


def _render_query(f: QueryLiteral) -> list[str]:
    kind = f.query.kind.value if f.query.kind else "desconhecido"
    lines = [
        f"Consulta SQL detectada: {_one_line(f.text)}",
        f"  Tipo: {kind}, tabela: {f.query.target_table}",
    ]
    lines += [
        f"  Referencia a variável rastreada '{ref.name}' = {_one_line(ref.value)}"
        for ref in f.query.referenced_variables
    ]
    return lines


def _render_unrecognized(f: Unrecognized) -> list[str]:
    return [f"Instrução desconhecida: {f.node_kind}"]


RENDERERS: dict[StatementKind, Callable] = {
    StatementKind.FOR_LOOP: _render_for,
    StatementKind.WHILE_LOOP: _render_while,
    StatementKind.DO_WHILE_LOOP: _render_do_while,
    StatementKind.CONDITIONAL: _render_conditional,
    StatementKind.TRY_CATCH: _render_try,
    StatementKind.INVOCATION: _render_invocation,
    StatementKind.ASSIGNMENT: _render_assignment,
    StatementKind.BINARY_COMPUTATION: _render_binary,
    StatementKind.QUERY_LITERAL: _render_query,
    StatementKind.UNRECOGNIZED: _render_unrecognized,
}


def render_finding(finding: StatementClassification) -> list[str]:
    return RENDERERS[finding.kind](finding)


# --- Pretty printing & JSON export ------------------------------------------

def _method_lines(mr: MethodReport) -> list[str]:
    pad = " " * 12
    lines = [f"        |-- {_one_line(mr.signature)}", f"{pad}(Descrição do método: {mr.description})"]
    if mr.naming_warning:
        lines.append(f"{pad}(Aviso: o nome do método '{mr.name}' não segue a convenção PascalCase)")
    if mr.analysis.too_long:
        lines.append(f"{pad}(Aviso: método muito longo ({mr.analysis.statement_count} instruções), considere refatorar)")

    if not mr.analysis.has_body:
        lines.append(f"{pad}Método sem corpo.")
    else:
        lines.append(f"{pad}Lógica do método:")
        for finding in mr.analysis.findings:
            first, *rest = render_finding(finding)
            lines.append(f"{pad} - {first}")
            lines += [f"{pad}   {line}" for line in rest]
    for diagnostic in mr.analysis.diagnostics:
        lines.append(f"{pad}(Ignorado: {diagnostic})")

    if isinstance(mr.dependencies, NoDependencies):
        lines.append(f"{pad}|-- {NO_DEPENDENCIES_LINE}")
    else:
        lines += [f"{pad}|-- Chama método: {_one_line(d.render())}" for d in mr.dependencies]
    return lines


def _class_lines(cr: ClassReport) -> list[str]:
    lines = [f"    |-- Classe: {cr.name}", f"        (Descrição da classe: {cr.role})"]
    if cr.attributes:
        lines.append(f"        (Atributos: {', '.join(cr.attributes)})")
    for diagnostic in cr.diagnostics:
        lines.append(f"        (Ignorado: {diagnostic})")
    for mr in cr.methods:
        lines += _method_lines(mr)
    return lines


def render_report(reports: list[FileReport]) -> str:
    """
    Indented, human-friendly text of what we found: file -> class -> method.
    """
    lines = []
    for fr in reports:
        lines.append(f"|-- {os.path.basename(fr.path)}")
        if fr.error:
            lines.append(f"    (Erro ao analisar o arquivo: {fr.error})")
        for diagnostic in fr.diagnostics:
            lines.append(f"    (Ignorado: {diagnostic})")
        for cr in fr.classes:
            lines += _class_lines(cr)
    return "\n".join(lines)


def print_summary(reports: list[FileReport]):
    print(render_report(reports))


def _finding_dict(finding: StatementClassification) -> dict:
    out = {"kind": finding.kind.value}
    out.update(asdict(finding))
    return out


def to_json(reports: list[FileReport]) -> str:
    """
    Serializes the reports to JSON. This is what you'd store in a DB.
    """
    out = []
    for fr in reports:
        out.append({
            "path": fr.path,
            "error": fr.error,
            "diagnostics": fr.diagnostics,
            "classes": [
                {
                    "name": cr.name,
                    "role": cr.role,
                    "line": cr.line,
                    "col": cr.col,
                    "attributes": cr.attributes,
                    "diagnostics": cr.diagnostics,
                    "methods": [
                        {
                            "name": mr.name,
                            "signature": mr.signature,
                            "description": mr.description,
                            "namingWarning": mr.naming_warning,
                            "tooLong": mr.analysis.too_long,
                            "hasBody": mr.analysis.has_body,
                            "findings": [_finding_dict(f) for f in mr.analysis.findings],
                            "diagnostics": mr.analysis.diagnostics,
                            "noDependencies": isinstance(mr.dependencies, NoDependencies),
                            "dependencies": [] if isinstance(mr.dependencies, NoDependencies) else [
                                {
                                    "name": d.callee_name,
                                    "receiver": d.receiver,
                                    "line": d.line,
                                    "col": d.col
                                } for d in mr.dependencies
                            ],
                            "line": mr.line,
                            "col": mr.col,
                        }
                        for mr in cr.methods
                    ]
                }
                for cr in fr.classes
            ]
        })
    return json.dumps(out, indent=2, ensure_ascii=False)
