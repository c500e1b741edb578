"""
# pngme: hide messages inside PNG files.

A PNG file is nothing more than an 8 bytes signature followed by a sequence of
chunks, each one made of

 1. a big-endian 32 bits length of the data
 2. a four letters type code
 3. the data itself
 4. a big-endian CRC-32 computed over type and data

The format is described declaratively: a file format is a subclass of
Chunk whose attributes are fields, and two operations are defined on it

 1. unpack(): read the binary data and build the high-level representation,
    every field knows how many bytes it needs to read from the stream.

 2. pack(): encode the high-level representation back into binary data.

Derived fields (the length and the CRC of a PNG chunk) are computed from the
fields they depend on, so that modifying the data doesn't require to touch
anything else.
"""
