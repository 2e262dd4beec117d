#
#  Django view sending a directory together with a generated listing.
#  Sizes of all entries are known, so Content-Length is sent up front.
#
import os

from django.http import StreamingHttpResponse
from zipit import FileDateTime, ZipStream

SHARED_DIR = '/srv/shared'


def listing_lines(paths):
    for path in paths:
        yield ('%s\t%d\n' % (os.path.basename(path),
                             os.path.getsize(path))).encode('utf-8')


def download_shared(request):
    paths = sorted(os.path.join(SHARED_DIR, f) for f in os.listdir(SHARED_DIR))
    paths = [p for p in paths if os.path.isfile(p)]
    listing = list(listing_lines(paths))

    files = [{'file': p, 'datetime': FileDateTime.ZERO} for p in paths]
    files.append({'stream': iter(listing),
                  'name': 'LISTING.txt',
                  'size': sum(len(line) for line in listing)})

    stream = ZipStream(files, chunksize=32768)
    response = StreamingHttpResponse(stream.stream(),
                                     content_type='application/zip')
    response['Content-Length'] = stream.size()
    response['Content-Disposition'] = 'attachment; filename="shared.zip"'
    return response
