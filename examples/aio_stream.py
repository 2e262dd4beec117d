#!/usr/bin/env python3
#
#  Asynchronous streaming of a directory together with generated content
#
import asyncio
import io
import os
import sys

import aiofiles
from zipit import AioZipStream


def files_to_stream(dirname):
    for f in os.listdir(dirname):
        fp = os.path.join(dirname, f)
        if os.path.isfile(fp):
            yield {'file': fp}
    yield {'stream': io.BytesIO(b'generated on the fly\n'),
           'name': 'generated.txt'}


async def zip_async(zipname, dirname):
    aioz = AioZipStream(files_to_stream(dirname), chunksize=32768)
    async with aiofiles.open(zipname, mode='wb') as z:
        async for chunk in aioz.stream():
            await z.write(chunk)


if __name__ == '__main__':
    asyncio.run(zip_async('example.zip', sys.argv[1]))
