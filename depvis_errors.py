"""
depvis_errors.py
Ошибки depvis. Каждый класс несёт свой код выхода процесса.
"""


class DepvisError(Exception):
    exit_code = 1


class ConfigError(DepvisError):
    exit_code = 2


class EntrypointNotFoundError(DepvisError):
    exit_code = 3

    def __init__(self, entrypoint):
        super().__init__(f"could not find {entrypoint}")
        self.entrypoint = entrypoint


class ManifestReadError(DepvisError):
    exit_code = 4

    def __init__(self, path, reason):
        super().__init__(f"failed to read manifest {path}: {reason}")
        self.path = path


class NoSourceNodeError(DepvisError):
    """Non-empty graph without a single node of in-degree 0."""
    exit_code = 5

    def __init__(self):
        super().__init__("a DAG must have at least one source (a node with an in-degree of 0)")


class CycleError(DepvisError):
    exit_code = 6

    def __init__(self, remaining):
        super().__init__(f"Graph has a cycle! No topological ordering exists (unsorted: {', '.join(map(str, remaining))})")
        self.remaining = list(remaining)


class UnknownNodeError(DepvisError, KeyError):
    exit_code = 7

    def __init__(self, node):
        super().__init__(f"node not in graph: {node}")
        self.node = node

    def __str__(self):
        return self.args[0]


class RenderError(DepvisError):
    exit_code = 8

    def __init__(self, output_file, reason):
        super().__init__(f"failed to draw {output_file} with Graphviz: {reason}")
        self.output_file = output_file
