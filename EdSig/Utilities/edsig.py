#!/usr/bin/env python3

# Reticulum License
#
# Copyright (c) 2016-2025 Mark Qvist
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# - The Software shall not be used in any kind of system which includes amongst
#   its functions the ability to purposefully do harm to human beings.
#
# - The Software shall not be used, directly or indirectly, in the creation of
#   an artificial intelligence, machine learning or language model training
#   dataset, including but not limited to any use that contributes to the
#   training or development of such a model or algorithm.
#
# - The above copyright notice and this permission notice shall be included in
#   all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

import os
import sys
import argparse

import EdSig
from EdSig._version import __version__
from EdSig.Cryptography.Errors import SignatureError, InvalidSignatureError
from EdSig.Cryptography.edwards25519 import eddsa

APP_NAME = "edsig"

SIG_EXT = "esg"

def load_keypair(key_hex):
    data = bytes.fromhex(key_hex)
    if len(data) == eddsa.SEED_LENGTH:
        return eddsa.create_keypair(data)

    elif len(data) == eddsa.KEYPAIR_LENGTH:
        if eddsa.create_keypair(data[:eddsa.SEED_LENGTH]) != data:
            raise ValueError("public key does not match the seed of the key pair")
        return data

    else:
        raise ValueError("expected a "+str(eddsa.SEED_LENGTH)+" byte seed or a "+str(eddsa.KEYPAIR_LENGTH)+" byte key pair")

def load_public_key(public_hex):
    data = bytes.fromhex(public_hex)
    if len(data) != eddsa.PUBLIC_LENGTH:
        raise ValueError("expected a "+str(eddsa.PUBLIC_LENGTH)+" byte public key")
    return data

def read_file(path):
    with open(path, "rb") as f:
        return f.read()

def signature_paths(path, signature_path=None):
    """Returns the (data, signature) path pair for a file to validate"""
    if signature_path == None:
        if path.lower().endswith("."+SIG_EXT):
            return path[:-len("."+SIG_EXT)], path
        else:
            return path, path+"."+SIG_EXT

    return path, signature_path

def sign_file(path, keypair, output=None, force=False, noise=False):
    if not os.path.isfile(path):
        EdSig.log("Input file "+str(path)+" not found", EdSig.LOG_ERROR)
        sys.exit(3)

    if output == None:
        output = str(path)+"."+SIG_EXT

    if not force and os.path.isfile(output):
        EdSig.log("Output file "+str(output)+" already exists. Not overwriting.", EdSig.LOG_ERROR)
        sys.exit(4)

    try:
        data = read_file(path)
    except Exception as e:
        EdSig.log("Could not open input file for reading", EdSig.LOG_ERROR)
        EdSig.log("The contained exception was: "+str(e), EdSig.LOG_ERROR)
        sys.exit(3)

    try:
        noise_bytes = os.urandom(eddsa.NOISE_LENGTH) if noise else None
        signature = eddsa.sign(data, keypair, noise_bytes)
    except Exception as e:
        EdSig.log("An error ocurred while signing data.", EdSig.LOG_ERROR)
        EdSig.trace_exception(e)
        sys.exit(5)

    try:
        with open(output, "wb") as f:
            f.write(signature)
    except Exception as e:
        EdSig.log("Could not write signature to "+str(output), EdSig.LOG_ERROR)
        EdSig.log("The contained exception was: "+str(e), EdSig.LOG_ERROR)
        sys.exit(4)

    EdSig.log("File "+str(path)+" signed with "+EdSig.prettyhexrep(eddsa.public_key(keypair))+" to "+str(output))
    sys.exit(0)

def validate_file(path, public_key, signature_path=None):
    data_path, signature_path = signature_paths(path, signature_path)
    for p in [data_path, signature_path]:
        if not os.path.isfile(p):
            EdSig.log("Input file "+str(p)+" not found", EdSig.LOG_ERROR)
            sys.exit(3)

    try:
        data = read_file(data_path)
        signature = read_file(signature_path)
    except Exception as e:
        EdSig.log("Could not open input files for reading", EdSig.LOG_ERROR)
        EdSig.log("The contained exception was: "+str(e), EdSig.LOG_ERROR)
        sys.exit(3)

    try:
        eddsa.verify(signature, data, public_key)
        EdSig.log("Signature "+str(signature_path)+" for file "+str(data_path)+" made by "+EdSig.prettyhexrep(public_key)+" is valid")
        sys.exit(0)

    except InvalidSignatureError:
        EdSig.log("Signature "+str(signature_path)+" for file "+str(data_path)+" is invalid", EdSig.LOG_ERROR)
        sys.exit(6)

    except (SignatureError, ValueError) as e:
        EdSig.log("Signature "+str(signature_path)+" for file "+str(data_path)+" was rejected: "+type(e).__name__+", "+str(e), EdSig.LOG_ERROR)
        sys.exit(7)

def validate_batch(paths, public_key):
    signature_batch = []
    for path in paths:
        data_path, signature_path = signature_paths(path)
        for p in [data_path, signature_path]:
            if not os.path.isfile(p):
                EdSig.log("Input file "+str(p)+" not found", EdSig.LOG_ERROR)
                sys.exit(3)

        try:
            signature_batch.append(eddsa.BatchElement(read_file(signature_path), read_file(data_path), public_key))
        except Exception as e:
            EdSig.log("Could not open input files for reading", EdSig.LOG_ERROR)
            EdSig.log("The contained exception was: "+str(e), EdSig.LOG_ERROR)
            sys.exit(3)

    try:
        eddsa.verify_batch(signature_batch)
        EdSig.log("All "+str(len(signature_batch))+" signatures made by "+EdSig.prettyhexrep(public_key)+" are valid")
        sys.exit(0)

    except InvalidSignatureError:
        EdSig.log("The batch of "+str(len(signature_batch))+" signatures is invalid", EdSig.LOG_ERROR)
        sys.exit(6)

    except (SignatureError, ValueError) as e:
        EdSig.log("The batch of "+str(len(signature_batch))+" signatures was rejected: "+type(e).__name__+", "+str(e), EdSig.LOG_ERROR)
        sys.exit(7)

def main(argv=None):
    try:
        parser = argparse.ArgumentParser(description="Ed25519 Signing Utility")

        parser.add_argument("-g", "--generate", action="store_true", default=False, help="generate a new key pair")
        parser.add_argument("-k", "--key", metavar="hex", action="store", default=None, help="hexadecimal seed or key pair", type=str)
        parser.add_argument("-p", "--public", metavar="hex", action="store", default=None, help="hexadecimal public key", type=str)

        parser.add_argument("-s", "--sign", metavar="path", action="store", default=None, help="sign file")
        parser.add_argument("-V", "--validate", metavar="path", action="store", default=None, help="validate signature")
        parser.add_argument("-B", "--batch", metavar="path", nargs="+", default=None, help="validate signatures for several files at once")

        parser.add_argument("-S", "--signature", metavar="path", action="store", default=None, help="signature file path", type=str)
        parser.add_argument("-w", "--write", metavar="path", action="store", default=None, help="output file path", type=str)
        parser.add_argument("-f", "--force", action="store_true", default=None, help="write output even if it overwrites existing files")
        parser.add_argument("-n", "--noise", action="store_true", default=False, help="add random noise to signatures")

        parser.add_argument("-v", "--verbose", action="count", default=0, help="increase verbosity")
        parser.add_argument("-q", "--quiet", action="count", default=0, help="decrease verbosity")
        parser.add_argument("-l", "--logfile", metavar="path", action="store", default=None, help="write log output to file instead of stdout", type=str)
        parser.add_argument("--version", action="version", version=APP_NAME+" {version}".format(version=__version__))

        args = parser.parse_args(argv)

        EdSig.loglevel = EdSig.LOG_INFO+args.verbose-args.quiet
        EdSig.compact_log_fmt = True
        if args.logfile != None:
            EdSig.logdest = EdSig.LOG_FILE
            EdSig.logfile = args.logfile

        ops = 0
        for t in [args.generate, args.sign, args.validate, args.batch]:
            if t:
                ops += 1

        if ops > 1:
            EdSig.log("This utility only supports one of the generate, sign, validate or batch operations per invocation", EdSig.LOG_ERROR)
            sys.exit(1)

        if ops == 0:
            print("")
            parser.print_help()
            print("")
            sys.exit(1)

        if args.generate:
            keypair = eddsa.generate_keypair()
            print("Key pair   : "+EdSig.hexrep(keypair, delimit=False))
            print("Public key : "+EdSig.hexrep(eddsa.public_key(keypair), delimit=False))
            sys.exit(0)

        keypair = None
        public_key = None
        if args.key:
            try:
                keypair = load_keypair(args.key)
                public_key = eddsa.public_key(keypair)
            except ValueError as e:
                EdSig.log("Invalid key specified: "+str(e), EdSig.LOG_ERROR)
                sys.exit(2)

        if args.public:
            try:
                public_key = load_public_key(args.public)
            except ValueError as e:
                EdSig.log("Invalid public key specified: "+str(e), EdSig.LOG_ERROR)
                sys.exit(2)

        if args.sign:
            if keypair == None:
                EdSig.log("No key pair provided, cannot sign", EdSig.LOG_ERROR)
                sys.exit(2)
            sign_file(args.sign, keypair, output=args.write, force=args.force, noise=args.noise)

        if public_key == None:
            EdSig.log("No public key provided, cannot validate", EdSig.LOG_ERROR)
            sys.exit(2)

        if args.validate:
            validate_file(args.validate, public_key, signature_path=args.signature)

        if args.batch:
            validate_batch(args.batch, public_key)

    except KeyboardInterrupt:
        print("")
        sys.exit(255)

if __name__ == "__main__":
    main()
