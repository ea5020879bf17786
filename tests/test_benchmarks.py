from benchmarks import suite


def small_words(n=500):
    return sorted(f"word-{i:05d}" for i in range(n))


def test_build_split():
    words = small_words()
    bloom, train, test = suite.build_split(words, "xxh64")
    assert len(train) == 400
    assert len(test) == 100
    assert bloom.expected_elements == 400
    assert all(w in bloom for w in train)


def test_checks_report(capsys):
    bloom, train, test = suite.build_split(small_words(), "murmur3")
    suite.check_membership(bloom, train)
    fpr = suite.check_false_positives(bloom, train, test)
    suite.check_collisions(bloom, train, test)
    suite.show_properties(bloom, train)

    out = capsys.readouterr().out
    assert "Missing after insertion: 0" in out
    assert 0.0 <= fpr < 0.1


def test_false_positives_without_held_out_items():
    bloom, train, _ = suite.build_split(small_words(), "fnv1a")
    assert suite.check_false_positives(bloom, train, train) is None
