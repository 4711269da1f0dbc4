from trivia_profile.services.fingerprint import fingerprint, normalize_question_text


def test_fingerprint_is_deterministic():
    text = "What is the capital of France?"
    assert fingerprint(text) == fingerprint(text)


def test_fingerprint_ignores_case_spacing_and_punctuation():
    assert fingerprint("Hello, World!") == fingerprint("helloworld")
    assert fingerprint("  What   is\tthis?\n") == fingerprint("whatisthis")


def test_fingerprint_is_sha256_hex():
    digest = fingerprint("anything")
    assert len(digest) == 64
    int(digest, 16)


def test_different_text_different_fingerprint():
    assert fingerprint("Who wrote Hamlet?") != fingerprint("Who wrote Macbeth?")


def test_normalize_keeps_unicode_letters_and_digits():
    assert normalize_question_text("Café No. 5!") == "caféno5"


def test_empty_text_hashes_like_punctuation_only_text():
    assert fingerprint("") == fingerprint("?!  ...")
