from collections import abc


def is_seq_of(seq, expected_type, seq_type=None) -> bool:
    """Check whether it is a sequence of some type."""
    if seq_type is None:
        exp_seq_type = abc.Sequence
    else:
        assert isinstance(seq_type, type)
        exp_seq_type = seq_type
    if not isinstance(seq, exp_seq_type) or isinstance(seq, str):
        return False
    return all(isinstance(item, expected_type) for item in seq)
