from roster.core.crypto import NO_PASSWORD, PasswordHasher


def test_hash_and_verify(hasher: PasswordHasher):
    hashed = hasher.hash_password("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert hasher.verify_password("s3cret-pass", hashed)
    assert not hasher.verify_password("wrong-pass", hashed)


def test_hashes_are_salted(hasher: PasswordHasher):
    assert hasher.hash_password("s3cret-pass") != hasher.hash_password("s3cret-pass")


def test_empty_or_corrupt_hash_never_matches(hasher: PasswordHasher):
    assert not hasher.verify_password("", NO_PASSWORD)
    assert not hasher.verify_password("anything", NO_PASSWORD)
    assert not hasher.verify_password("anything", "not-a-bcrypt-hash")


def test_burn_builds_its_dummy_hash_once(hasher: PasswordHasher):
    hasher.burn("whatever")
    first = hasher._dummy_hash
    hasher.burn("whatever-else")
    assert first is not None
    assert hasher._dummy_hash == first
