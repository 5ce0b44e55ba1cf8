import EdSig

# Keep failure diagnostics out of the test output
EdSig.loglevel = EdSig.LOG_WARNING
