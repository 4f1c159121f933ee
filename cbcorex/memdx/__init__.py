"""Memcached binary protocol: packets, codec, status codes, sub-document and range scan helpers."""