import heapq
from itertools import count

from core.errors import SearchBudgetExceeded
from core.graph.lazy import LazyGraph


class DistCache:
    """
    Точные стоимости кратчайших путей полным перебором (Dijkstra).

    Годится только для маленьких конечных графов: используется как
    эталон при проверке A* и как точная эвристика.
    """

    def __init__(self, graph: LazyGraph, max_vertices: int = 100_000):
        self.graph = graph
        self.max_vertices = max_vertices
        self.cache = {}  # hash(source) → {hash: cost}

    def dist_map(self, source):
        key = self.graph.hash_of(source)
        if key in self.cache:
            return self.cache[key]

        dist = {key: 0}
        tie = count()
        heap = [(0, next(tie), source)]
        done = set()
        while heap:
            d, _, data = heapq.heappop(heap)
            h = self.graph.hash_of(data)
            if h in done:
                continue
            done.add(h)
            if len(done) > self.max_vertices:
                raise SearchBudgetExceeded(
                    f"граф больше {self.max_vertices} вершин, полный обход невозможен"
                )
            for nb in self.graph.neighbours_of(data):
                nd = d + self.graph.cost_between(data, nb)
                nh = self.graph.hash_of(nb)
                if nh not in dist or nd < dist[nh]:
                    dist[nh] = nd
                    heapq.heappush(heap, (nd, next(tie), nb))

        self.cache[key] = dist
        return dist

    def dist(self, u, v):
        """Стоимость кратчайшего пути u → v, или -1 если v недостижима."""
        dm = self.dist_map(u)
        return dm.get(self.graph.hash_of(v), -1)
