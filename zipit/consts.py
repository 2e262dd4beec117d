from collections import namedtuple
import struct


# zip constants
ZIP_VERSION = 10        # version needed to extract: stored, no extras
ZIP_MADE_BY_VERSION = 30
ZIP_MADE_BY_SYSTEM = 0x03   # unix
DATA_DESCRIPTOR_FLAG = 0x08   # crc and sizes follow the payload
UTF8_FLAG = 0x800   # utf-8 filename encoding flag
FLAGS = DATA_DESCRIPTOR_FLAG | UTF8_FLAG

COMPRESSION_STORE = 0

# regular file, rw-r--r--, in the high word as unix tools expect
EXTERNAL_ATTRS = (0o100000 | 0o644) << 16

# field width limits
UINT16_MAX = 0xffff
UINT32_MAX = 0xffffffff

DEFAULT_CHUNKSIZE = 4096

# file header
LF_STRUCT = struct.Struct(b"<4sHHHHHLLLHH")
LF_TUPLE = namedtuple("fileheader",
                      ("signature", "version", "flags",
                       "compression", "mod_time", "mod_date",
                       "crc", "comp_size", "uncomp_size",
                       "fname_len", "extra_len"))
LF_MAGIC = b'\x50\x4b\x03\x04'

# data descriptor, signature included
DD_STRUCT = struct.Struct(b"<4sLLL")
DD_TUPLE = namedtuple("datadescriptor",
                      ("signature", "crc", "comp_size", "uncomp_size"))
DD_MAGIC = b'\x50\x4b\x07\x08'

# central directory file header
CDLF_STRUCT = struct.Struct(b"<4sBBHHHHHLLLHHHHHLL")
CDLF_TUPLE = namedtuple("cdfileheader",
                        ("signature", "version", "system", "version_ndd", "flags",
                         "compression", "mod_time", "mod_date", "crc",
                         "comp_size", "uncomp_size", "fname_len", "extra_len",
                         "fcomm_len", "disk_start", "attrs_int", "attrs_ext", "offset"))
CDFH_MAGIC = b'\x50\x4b\x01\x02'

# end of central directory record
CD_END_STRUCT = struct.Struct(b"<4sHHHHLLH")
CD_END_TUPLE = namedtuple("cdend",
                          ("signature", "disk_num", "disk_cdstart", "disk_entries",
                           "total_entries", "cd_size", "cd_offset", "comment_len"))
CD_END_MAGIC = b'\x50\x4b\x05\x06'
