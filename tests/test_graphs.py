from convexity.dparser import parse_dfa_code
from convexity.graphs import StatePairGraph

# the single word a, with sink 2
single_a = parse_dfa_code("122222ftf", 3, 2)

def test_nodes():
    graph = StatePairGraph(single_a)
    assert graph.num_nodes == 9
    assert graph.index(1, 2) == 5
    assert graph.pair(5) == (1, 2)
    assert graph.move(0, 0) == graph.index(1, 1)
    assert graph.move(0, 1) == graph.index(2, 2)
    assert graph.neighbours(0) == [4, 8]
    assert graph.neighbours(8) == [8]

def test_reachable():
    graph = StatePairGraph(single_a)
    assert graph.reachable(0, 1, 1, 2)
    assert graph.reachable(0, 1, 2, 2)
    assert not graph.reachable(0, 1, 1, 1)
    assert not graph.reachable(2, 2, 0, 0)
    # every node reaches itself
    assert graph.reachable(1, 0, 1, 0)
