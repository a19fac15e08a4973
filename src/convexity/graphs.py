"""
A StatePairGraph runs two copies of the same DFA in parallel.
Its nodes are pairs (left, right) of states, stored as the integer
left * num_states + right, and each symbol moves both components.
The successors are kept in a nodes x symbols numpy table.
"""

import numpy as np

class StatePairGraph:

    def __init__(self, dfa):
        self.dfa = dfa
        self.num_states = n = dfa.num_states
        self.num_nodes = n*n
        table = np.array(dfa.trans, dtype=np.int64).reshape(n, dfa.alph_size)
        # succ[i*n + j, a] = trans[i][a]*n + trans[j][a]
        self.succ = (table[:, None, :]*n + table[None, :, :]).reshape(n*n, dfa.alph_size)

    def index(self, left, right):
        return self.num_states*left + right

    def pair(self, node):
        return divmod(node, self.num_states)

    def move(self, node, sym):
        return int(self.succ[node, sym])

    def neighbours(self, node):
        return [int(x) for x in np.unique(self.succ[node])]

    def reachable(self, left0, right0, left1, right1):
        "Is the pair (left1, right1) reachable from (left0, right0)?"
        source = self.index(left0, right0)
        target = self.index(left1, right1)
        visited = np.zeros(self.num_nodes, dtype=bool)
        stack = [source]
        while stack:
            node = stack.pop()
            visited[node] = True
            if node == target:
                return True
            for node2 in self.neighbours(node):
                if not visited[node2]:
                    stack.append(node2)
        return False
