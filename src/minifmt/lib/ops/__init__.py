"""Operations behind the minifmt command line."""
