from collections import Counter
from word_cursor import WordCursor

class VocabBuilder:
    def __init__(self, word_cursor: WordCursor, min_freq=1, max_vocab_size=None):
        self.min_freq = min_freq
        self.max_vocab_size = max_vocab_size
        self.word_counts = Counter()
        self.word_cursor = word_cursor

    def _update_from_cursor(self):
        """
        Drain the cursor and count word frequencies. The cursor is closed afterwards.
        """
        with self.word_cursor as cursor:
            while cursor.has_next():
                self.word_counts[cursor.next()] += 1


    def build_vocab(self):
        """
        Build the vocabulary dictionary mapping words to indices, most frequent first
        """
        self._update_from_cursor()
        vocab = {}
        idx_to_word = {}
        idx = 0
        for word, count in self.word_counts.most_common():
            if self.max_vocab_size and len(vocab) >= self.max_vocab_size:
                break

            if count >= self.min_freq:
                vocab[word] = idx
                idx_to_word[idx] = word
                idx += 1

        return vocab, idx_to_word, self.word_counts
