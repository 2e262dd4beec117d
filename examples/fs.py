#!/usr/bin/env python3
#
#  Write an archive to the file system, synchronously and with aiofiles
#
import asyncio
import io

import aiofiles
from zipit import Archive, AioArchive, FileDateTime


def write_sync(zipname):
    with open(zipname, 'wb') as fh:
        archive = Archive(fh)
        archive.append('file1.txt', FileDateTime.now(), io.BytesIO(b'hello\n'))
        archive.append('file2.txt', FileDateTime.now(), io.BytesIO(b'world\n'))
        archive.finalize()


async def write_async(zipname):
    async with aiofiles.open(zipname, 'wb') as fh:
        archive = AioArchive(fh)
        await archive.append('file1.txt', FileDateTime.now(), io.BytesIO(b'hello\n'))
        await archive.append('file2.txt', FileDateTime.now(), io.BytesIO(b'world\n'))
        await archive.finalize()


if __name__ == '__main__':
    write_sync('archive.zip')
    asyncio.run(write_async('aarchive.zip'))
