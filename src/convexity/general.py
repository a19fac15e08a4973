import string

# symbols are 0-based indices, displayed as lowercase letters
MAX_ALPH_SIZE = 26
LETTERS = string.ascii_lowercase

def letter(sym):
    return LETTERS[sym]

def symbol(let):
    return LETTERS.index(let.lower())

def word_symbols(word):
    "A word given as a string of letters or a sequence of symbol indices."
    if isinstance(word, str):
        return [symbol(let) for let in word]
    return list(word)

def heap_transpositions(k):
    """
    Iterative Heap's algorithm on k elements.
    Yields the k!-1 position pairs (i, j) whose successive swaps
    visit every permutation of the elements exactly once.
    """
    counters = [0]*k
    i = 1
    while i < k:
        if counters[i] < i:
            if i % 2 == 0:
                yield (0, i)
            else:
                yield (counters[i], i)
            counters[i] += 1
            i = 1
        else:
            counters[i] = 0
            i += 1
