"""BSC peer protocol pieces: upgrade status message, handshake and block state."""