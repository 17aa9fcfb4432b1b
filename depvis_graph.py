"""
depvis_graph.py
Ориентированный граф зависимостей: построение, топологическая сортировка,
инверсия, обход в ширину и выделение подграфа.

Ребро A -> B означает "A зависит от B".
"""
from collections import deque
from typing import Dict, Generic, Hashable, Iterable, List, Set, Tuple, TypeVar

import graphviz

from depvis_errors import CycleError, EntrypointNotFoundError, NoSourceNodeError, UnknownNodeError

T = TypeVar("T", bound=Hashable)


class DirectedGraph(Generic[T]):
    def __init__(self):
        # dict used as an ordered set: iteration order drives topo_sort tie-breaks
        self._edges: Dict[T, Dict[T, None]] = {}

    def add_all(self, source: T, *destinations: T) -> None:
        deps = self._edges.setdefault(source, {})
        for dest in destinations:
            deps[dest] = None
        for dest in destinations:
            self._edges.setdefault(dest, {})

    def nodes(self) -> List[T]:
        return list(self._edges)

    def dependencies(self, node: T) -> List[T]:
        if node not in self._edges:
            raise UnknownNodeError(node)
        return list(self._edges[node])

    def is_cyclic(self) -> bool:
        visited: Set[T] = set()
        for root in self._edges:
            if root in visited:
                continue
            visited.add(root)
            # DFS with an explicit stack; on_stack mirrors the current path
            on_stack = {root}
            stack = [(root, iter(self._edges[root]))]
            while stack:
                node, deps = stack[-1]
                for dep in deps:
                    if dep in on_stack:
                        return True
                    if dep not in visited:
                        visited.add(dep)
                        on_stack.add(dep)
                        stack.append((dep, iter(self._edges[dep])))
                        break
                else:
                    stack.pop()
                    on_stack.remove(node)
        return False

    def indegrees(self) -> Dict[T, int]:
        counts: Dict[T, int] = {}
        for node, deps in self._edges.items():
            counts.setdefault(node, 0)
            for dep in deps:
                counts[dep] = counts.get(dep, 0) + 1
        return counts

    def topo_sort(self) -> List[T]:
        """
        Алгоритм Кана. Узлы без входящих рёбер (от них никто не зависит)
        выводятся первыми; очередь работает как стек, поэтому из одновременно
        готовых узлов первым выходит добавленный последним.
        """
        counts = self.indegrees()
        sources = [node for node, count in counts.items() if count == 0]
        if self._edges and not sources:
            raise NoSourceNodeError()

        order: List[T] = []
        while sources:
            node = sources.pop()
            order.append(node)
            for dep in self._edges[node]:
                counts[dep] -= 1
                if counts[dep] == 0:
                    sources.append(dep)

        if len(order) != len(self._edges):
            emitted = set(order)
            raise CycleError([node for node in self._edges if node not in emitted])
        return order

    def invert(self) -> "DirectedGraph[T]":
        inverted: DirectedGraph[T] = DirectedGraph()
        for node, deps in self._edges.items():
            inverted.add_all(node)
            for dep in deps:
                inverted.add_all(dep, node)
        return inverted

    def walk(self, start: T) -> Set[T]:
        if start not in self._edges:
            raise UnknownNodeError(start)
        visited: Set[T] = set()
        queue = deque([start])

        while queue:
            node = queue.popleft()
            if node in visited:
                continue
            visited.add(node)
            queue.extend(dep for dep in self._edges[node] if dep not in visited)
        return visited

    def subgraph(self, keep: Iterable[T]) -> "DirectedGraph[T]":
        keep = set(keep)
        sub: DirectedGraph[T] = DirectedGraph()
        for node, deps in self._edges.items():
            if node not in keep:
                continue
            sub.add_all(node, *(dep for dep in deps if dep in keep))
        return sub

    def render(self) -> str:
        lines = ["digraph G {"]
        for node, deps in self._edges.items():
            lines.append(f"  {_quote(node)}")
            for dep in deps:
                lines.append(f"  {_quote(node)} -> {_quote(dep)}")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def to_graphviz(self, name: str = "G") -> graphviz.Digraph:
        dot = graphviz.Digraph(name=name, comment="Граф зависимостей")
        for node, deps in self._edges.items():
            dot.node(str(node))
            for dep in deps:
                dot.edge(str(node), str(dep))
        return dot

    def __contains__(self, node) -> bool:
        return node in self._edges

    def __len__(self) -> int:
        return len(self._edges)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DirectedGraph):
            return NotImplemented
        return ({n: set(d) for n, d in self._edges.items()}
                == {n: set(d) for n, d in other._edges.items()})

    def __repr__(self) -> str:
        edge_count = sum(len(deps) for deps in self._edges.values())
        return f"DirectedGraph(nodes={len(self._edges)}, edges={edge_count})"


def _quote(node) -> str:
    text = str(node).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def build_graph(manifests: Iterable[Tuple[str, List[str]]]) -> DirectedGraph[str]:
    graph: DirectedGraph[str] = DirectedGraph()
    for name, deps in manifests:
        graph.add_all(name, *deps)
    return graph


def dependents_subgraph(graph: DirectedGraph[T], entrypoint: T) -> DirectedGraph[T]:
    """
    Подграф из entrypoint и всех пакетов, которые от него транзитивно зависят.
    Рёбра берутся из исходного (не инвертированного) графа.
    """
    if entrypoint not in graph:
        raise EntrypointNotFoundError(entrypoint)
    dependents = graph.invert().walk(entrypoint)
    return graph.subgraph(dependents)
