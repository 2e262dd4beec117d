#!/usr/bin/env python3
import io
from zipit import Archive, FileDateTime, archive_size

files = [('file1.txt', b'hello\n'), ('file2.txt', b'world\n')]

archive = Archive(io.BytesIO())
for name, content in files:
    archive.append(name, FileDateTime.ZERO, io.BytesIO(content))
data = archive.finalize().getvalue()

assert len(data) == archive_size((n, len(c)) for n, c in files)
print("The archive size is %d." % len(data))
