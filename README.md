# sigtalk

Send a line of text from one process to another using only two POSIX
signals. Each bit of the message travels as `SIGUSR1` (a one) or `SIGUSR2`
(a zero). Bits go most significant first, and a NUL byte ends the message.
The server acknowledges every bit before the client sends the next.

This works on POSIX systems only, because it depends on `SIGUSR1`,
`SIGUSR2` and `signal.sigtimedwait`.

## Installation

```
pip install .
```

## Usage

Start the server. It prints its process id and then waits for clients
until you interrupt it with Ctrl-C:

```
sigtalk-server
```

From another terminal, send a message to that process id:

```
sigtalk-client 12345 "hello there"
```

The client takes exactly two arguments. With any other number it exits
with status 0 and does nothing. The process id is read the way `atoi`
reads a number.

The server decodes the message as UTF-8, replacing any invalid bytes, and
prints it. It then prints `Successfully received Message`.

The server handles one client at a time. The client can also report these
results:

- `Server is busy with another client.` The server is talking to another
  client, and turned this one away during its first byte.
- `Server closed Connection.` The server ended the exchange before the
  whole message was sent.
- `Failed attempt to communicate with Server`. No acknowledgement arrived
  within 0.9 seconds. The client exits with status 1.
- `Error during communication`. A signal could not be delivered, for
  example because no process has that id. The client exits with status 1.

If a client stops sending in the middle of a message, the server waits 0.9
seconds, prints `Timeout: Client dropped.`, throws away the partial
message and accepts new clients again. A message longer than 2097151
bytes is refused with `Message too long: Client dropped.`, and the client
is told that the connection is closed.

## Library use

The wire format can be used without any signals:

```python
from sigtalk.protocol import MessageDecoder, encode_bits

decoder = MessageDecoder()
for bit in encode_bits("hi"):
    message = decoder.feed(bit)
    if message is not None:
        print(message)  # b'hi'
```

`encode_bits` accepts `str` (encoded as UTF-8) or `bytes`. It raises
`ValueError` if the message contains a NUL byte. `MessageDecoder.feed`
returns the complete message as `bytes` once the terminator has arrived.
It raises `OverflowError` if the message exceeds the decoder's capacity.
`MessageDecoder.reset` discards a partly received message.

- `sigtalk.client.send_message(message, pid)` sends a message and returns
  an `Outcome`: `SENT`, `CLOSED`, `BUSY` or `TIMEOUT`. It raises
  `ConnectionError` when a signal cannot be delivered.
- `sigtalk.server.Server(output=None, ack_timeout=0.9)` is the receiving
  side. `handle_signal(sig, pid)` processes one bit and returns the message
  once it is complete. `timeout()` drops the current client.
  `serve_forever()` waits for signals and handles them.
- `sigtalk.helper.safe_kill(pid, sig, err_message)` sends a signal. It
  returns `False` and prints the message if the signal cannot be sent.

The package also contains the small helpers it is built on:

- `sigtalk.chars`: ASCII classification and case conversion.
- `sigtalk.memory`: fill, copy, move, search, compare and allocate byte
  buffers.
- `sigtalk.text`: bounded copy and concatenation, search, bounded compare,
  `atoi`-style `parse_int` and `int_to_str`.
- `sigtalk.transform`: duplicate, substring, join, trim, split and indexed
  mapping.
- `sigtalk.output`: write characters, strings and integers to a stream.

These helpers follow C string rules: a string ends at its first NUL
character.

## Running the tests

```
pip install .[test]
pytest
```