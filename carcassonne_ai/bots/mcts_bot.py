"""Monte Carlo tree search over placements and tile draws."""
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple, Union

from ..board import MoveRequest, TileData
from ..types import Player
from .playouts import run_batch

if TYPE_CHECKING:
    from ..referee import RefereeState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacementEdge:
    request: MoveRequest


@dataclass(frozen=True)
class DrawEdge:
    """Chance outcome: the listed tiles are taken from the bag, the last one lands on top."""

    tiles: Tuple[TileData, ...]


Edge = Union[PlacementEdge, DrawEdge]


@dataclass
class Node:
    """Arena slot; parent and children are indices into ``ArenaTree.nodes``."""

    idx: int
    edge: Edge
    player: Player
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    visits: int = 0
    reward: float = 0.0

    @property
    def mean_reward(self) -> float:
        return self.reward / self.visits if self.visits else 0.0


class ArenaTree:
    """Search tree stored as a flat, append-only list of nodes.

    Placement and draw levels alternate. Selection takes the best UCB child
    below a draw node and a uniformly random child below a placement node,
    so chance outcomes are sampled rather than optimised.
    """

    def __init__(
        self,
        state: "RefereeState",
        rng: random.Random,
        exploration: float = 2.0,
        workers: int = 1,
    ) -> None:
        self.state = state
        self.rng = rng
        self.exploration = exploration
        self.workers = workers
        self.rollouts = 0
        root_edge = DrawEdge((state.tilebag.peek().copy(),))
        self.nodes: List[Node] = [Node(idx=0, edge=root_edge, player=state.get_player())]

    @property
    def root_player(self) -> Player:
        return self.nodes[0].player

    def ucb(self, child: Node, parent_visits: int) -> float:
        q = child.mean_reward
        u = self.exploration * math.sqrt(math.log(parent_visits + 1) / (child.visits + 1))
        return q + u

    def iterate(self) -> None:
        leaf = self.selection()
        new_nodes = self.expansion(leaf) or [leaf]
        jobs = [(self.state_at(idx), None, self.root_player, self.rng.getrandbits(64)) for idx in new_nodes]
        rewards = run_batch(jobs, self.workers)
        self.rollouts += len(jobs)
        for idx, reward in zip(new_nodes, rewards):
            self.back_prop(idx, float(reward))

    def selection(self) -> int:
        cur = self.nodes[0]
        while cur.children:
            if isinstance(cur.edge, DrawEdge):
                parent_visits = cur.visits
                cur = max((self.nodes[c] for c in cur.children), key=lambda n: self.ucb(n, parent_visits))
            else:
                cur = self.nodes[self.rng.choice(cur.children)]
        return cur.idx

    def expansion(self, idx: int) -> List[int]:
        state = self.state_at(idx)
        if isinstance(self.nodes[idx].edge, DrawEdge):
            edges: List[Edge] = [PlacementEdge(request) for request in state.get_legal_moves()]
        else:
            edges = [DrawEdge((tile,)) for tile in self._distinct_legal_draws(state)]
        player = state.get_player()
        out = []
        for edge in edges:
            node = Node(idx=len(self.nodes), edge=edge, player=player, parent=idx)
            self.nodes.append(node)
            out.append(node.idx)
        self.nodes[idx].children.extend(out)
        return out

    def back_prop(self, idx: Optional[int], reward: float) -> None:
        root_player = self.root_player
        while idx is not None:
            node = self.nodes[idx]
            node.reward += reward if node.player == root_player else -reward
            node.visits += 1
            idx = node.parent

    def state_at(self, idx: int) -> "RefereeState":
        path = []
        while idx:
            path.append(idx)
            idx = self.nodes[idx].parent
        out = self.state.clone()
        for step in reversed(path):
            edge = self.nodes[step].edge
            if isinstance(edge, DrawEdge):
                out.tilebag.rig(list(edge.tiles))
            else:
                out.process_move(edge.request)
        return out

    def recommend(self) -> Optional[MoveRequest]:
        children = [self.nodes[c] for c in self.nodes[0].children]
        if not children:
            return None
        best = max(children, key=lambda n: n.visits)
        return best.edge.request

    @staticmethod
    def _distinct_legal_draws(state: "RefereeState") -> List[TileData]:
        if state.is_over():
            return []
        seen: Dict[str, TileData] = {}
        for tile in state.tilebag.remaining():
            key = repr(sorted(tile.to_dict().items()))
            if key not in seen and state.board.does_legal_move_exist(tile):
                seen[key] = tile.copy()
        return list(seen.values())


class MCTSBot:
    def __init__(
        self,
        player: Player,
        iterations: int = 200,
        exploration: float = 2.0,
        workers: int = 1,
        seed: Optional[int] = None,
    ) -> None:
        self.own_player = player
        self.iterations = iterations
        self.exploration = exploration
        self.workers = workers
        self.rng = random.Random(seed)

    @property
    def name(self) -> str:
        return f"MCTS bot {self.iterations}"

    def get_own_player(self) -> Player:
        return self.own_player

    def get_move(self, state: "RefereeState") -> MoveRequest:
        tree = ArenaTree(state, self.rng, exploration=self.exploration, workers=self.workers)
        for _ in range(self.iterations):
            tree.iterate()
        logger.debug("%s used %d rollouts over %d nodes", self.name, tree.rollouts, len(tree.nodes))
        best = tree.recommend()
        if best is None:
            return self.rng.choice(state.get_legal_moves())
        return best


__all__ = ["MCTSBot", "ArenaTree", "Node", "PlacementEdge", "DrawEdge"]
