"""Shared test fixtures — sample diffs."""

from __future__ import annotations

import textwrap

import pytest


@pytest.fixture
def sample_diff_two_modified() -> str:
    """Two modified files in one git diff."""
    return textwrap.dedent("""\
        diff --git a/a.txt b/a.txt
        index 1111111..2222222 100644
        --- a/a.txt
        +++ b/a.txt
        @@ -1,2 +1,2 @@
         keep
        -old a
        +new a
        diff --git a/b.txt b/b.txt
        index 3333333..4444444 100644
        --- a/b.txt
        +++ b/b.txt
        @@ -1 +1,2 @@
         first
        +second
    """)


@pytest.fixture
def sample_diff_new_file() -> str:
    """A newly added file with a trailing newline."""
    return textwrap.dedent("""\
        diff --git a/dir/new.txt b/dir/new.txt
        new file mode 100644
        index 0000000..e69de29
        --- /dev/null
        +++ b/dir/new.txt
        @@ -0,0 +1,2 @@
        +line1
        +line2
    """)


@pytest.fixture
def sample_diff_no_newline() -> str:
    """A newly added file whose last line has no newline."""
    return textwrap.dedent("""\
        diff --git a/data.txt b/data.txt
        new file mode 100644
        index 0000000..abc1234
        --- /dev/null
        +++ b/data.txt
        @@ -0,0 +1,2 @@
        +first line
        +final line without newline
        \\ No newline at end of file
    """)


@pytest.fixture
def sample_diff_deleted() -> str:
    """A deleted C file."""
    return textwrap.dedent("""\
        diff --git a/foo.c b/foo.c
        deleted file mode 100644
        index abc1234..0000000
        --- a/foo.c
        +++ /dev/null
        @@ -1,3 +0,0 @@
        -int main(void)
        -{
        -}
    """)


@pytest.fixture
def sample_diff_rename() -> str:
    """A renamed file with a content change."""
    return textwrap.dedent("""\
        diff --git a/old_name.py b/new_name.py
        similarity index 97%
        rename from old_name.py
        rename to new_name.py
        index abc1234..def5678 100644
        --- a/old_name.py
        +++ b/new_name.py
        @@ -1,1 +1,2 @@
         import os
        +# New line added after rename
    """)


@pytest.fixture
def sample_diff_binary() -> str:
    """A binary file added without a textual hunk."""
    return textwrap.dedent("""\
        diff --git a/image.png b/image.png
        new file mode 100644
        index 0000000..abc1234
        Binary files /dev/null and b/image.png differ
    """)


@pytest.fixture
def sample_diff_mode_only() -> str:
    """A file mode change followed by a regular change."""
    return textwrap.dedent("""\
        diff --git a/script.sh b/script.sh
        old mode 100644
        new mode 100755
        diff --git a/README b/README
        --- a/README
        +++ b/README
        @@ -1 +1 @@
        -hello
        +hello world
    """)


@pytest.fixture
def sample_format_patch() -> str:
    """git format-patch output: mail headers, diffstat, signature footer."""
    return textwrap.dedent("""\
        From 0123456789abcdef Mon Sep 17 00:00:00 2001
        From: Somebody <s@example.org>
        Subject: [PATCH] tidy things

        - drop the old helper
        - rename the flag
        ---
         src/file.txt | 2 +-
         1 file changed, 1 insertion(+), 1 deletion(-)

        diff --git a/src/file.txt b/src/file.txt
        index 0000001..1111111 100644
        --- a/src/file.txt
        +++ b/src/file.txt
        @@ -1,2 +1,2 @@
         line1
        --- old
        +++ new
        -- 
        2.25.1
    """)


@pytest.fixture
def sample_plain_diff() -> str:
    """diff -u output for two files (no git headers)."""
    return textwrap.dedent("""\
        diff -ru orig/one.c new/one.c
        --- orig/one.c\t2024-01-01 10:00:00.000000000 +0100
        +++ new/one.c\t2024-01-02 10:00:00.000000000 +0100
        @@ -1 +1 @@
        -int x;
        +int y;
        Only in new: extra.c
        --- orig/two.c\t2024-01-01 10:00:00.000000000 +0100
        +++ new/two.c\t2024-01-02 10:00:00.000000000 +0100
        @@ -2,0 +3 @@
        +/* appended */
    """)


@pytest.fixture
def sample_diff_malformed_preamble() -> str:
    """Content line before any file header."""
    return textwrap.dedent("""\
        +orphan added line
        diff --git a/x.txt b/x.txt
        --- a/x.txt
        +++ b/x.txt
        @@ -1 +1 @@
        -a
        +b
    """)


@pytest.fixture
def sample_git_log_p() -> str:
    """git log -p: a mode-only commit followed by a content commit."""
    return textwrap.dedent("""\
        commit 1111111111111111111111111111111111111111
        Author: A <a@example.org>
        Date:   Mon Jan 1 10:00:00 2024 +0000

            make script executable

        diff --git a/script.sh b/script.sh
        old mode 100644
        new mode 100755

        commit 2222222222222222222222222222222222222222
        Author: B <b@example.org>
        Date:   Tue Jan 2 10:00:00 2024 +0000

            second change

        diff --git a/README b/README
        index 1111111..2222222 100644
        --- a/README
        +++ b/README
        @@ -1 +1 @@
        -hello
        +hello world
    """)
