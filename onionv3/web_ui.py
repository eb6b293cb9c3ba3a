#!/usr/bin/env python3
"""
Web API for onion v3 addresses
JSON endpoints for generating identities and verifying addresses
"""

import logging

from flask import Flask, request, jsonify
from flask_socketio import SocketIO

from .config import (
    ADDRESS_LENGTH,
    CHECKSUM_TAG,
    LOG_FORMAT,
    LOG_LEVEL,
    ONION_SUFFIX,
    VERSION,
    WEB_HOST,
    WEB_PORT,
)
from .crypto import verify_address
from .exceptions import InvalidKeyError
from .identity import generate_onion_v3

logger = logging.getLogger(__name__)

app = Flask(__name__)
socketio = SocketIO(app, cors_allowed_origins="*")


def emit_update(event, data):
    """Emit update to all connected clients"""
    socketio.emit(event, data)


@app.route('/api/info')
def info():
    """Address format description"""
    return jsonify({
        'version': VERSION,
        'suffix': ONION_SUFFIX,
        'addressLength': ADDRESS_LENGTH,
        'checksumTag': CHECKSUM_TAG.decode(),
    })


@app.route('/api/identities', methods=['POST'])
def create_identity():
    """Generate an identity, or derive one from a given private key"""
    data = request.get_json(silent=True) or {}
    private_key_hex = data.get('privateKey')

    private_key = None
    if private_key_hex:
        try:
            private_key = bytes.fromhex(private_key_hex)
        except (TypeError, ValueError):
            return jsonify({'error': 'privateKey must be hex encoded'}), 400

    try:
        identity = generate_onion_v3(private_key)
    except InvalidKeyError as e:
        return jsonify({'error': str(e)}), 400

    emit_update('identity_created', {'address': identity.address})
    return jsonify({
        'address': identity.address,
        'publicKey': identity.public_key.hex(),
        'verified': identity.verified,
    })


@app.route('/api/addresses/<address>/verify')
def verify(address):
    """Verify an address and return the embedded public key"""
    result = verify_address(address)
    return jsonify({
        'address': address,
        'valid': result.valid,
        'publicKey': result.public_key.hex() if result.public_key else None,
    })


def main():
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    logger.info("Starting web API on http://%s:%d", WEB_HOST, WEB_PORT)
    socketio.run(app, host=WEB_HOST, port=WEB_PORT)


if __name__ == '__main__':
    main()
