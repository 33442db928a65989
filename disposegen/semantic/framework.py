# Well-known framework types that parsed sources reference but never declare.

from __future__ import annotations

from disposegen.semantic.symbols import TypeKind, TypeSymbol
from disposegen.work.models import Accessibility

DISPOSABLE_INTERFACE = "System.IDisposable"

_PUBLIC = Accessibility.PUBLIC


def _interface(namespace: str, name: str, *bases: str) -> TypeSymbol:
    return TypeSymbol(name=name, namespace=namespace, kind=TypeKind.INTERFACE, accessibility=_PUBLIC, base_names=bases)


def _class(namespace: str, name: str, *bases: str) -> TypeSymbol:
    return TypeSymbol(name=name, namespace=namespace, kind=TypeKind.CLASS, accessibility=_PUBLIC, base_names=bases)


# (qualified base names must point at entries of this table or be external)
FRAMEWORK_TYPES: tuple[TypeSymbol, ...] = (
    _interface("System", "IDisposable"),
    _interface("System", "IAsyncDisposable"),
    _interface("System.ComponentModel", "IComponent", "System.IDisposable"),
    _class("System.ComponentModel", "Component", "System.ComponentModel.IComponent"),
    # System.IO
    _class("System.IO", "Stream", "System.IDisposable", "System.IAsyncDisposable"),
    _class("System.IO", "FileStream", "System.IO.Stream"),
    _class("System.IO", "MemoryStream", "System.IO.Stream"),
    _class("System.IO", "BufferedStream", "System.IO.Stream"),
    _class("System.IO", "TextReader", "System.IDisposable"),
    _class("System.IO", "StreamReader", "System.IO.TextReader"),
    _class("System.IO", "StringReader", "System.IO.TextReader"),
    _class("System.IO", "TextWriter", "System.IDisposable", "System.IAsyncDisposable"),
    _class("System.IO", "StreamWriter", "System.IO.TextWriter"),
    _class("System.IO", "StringWriter", "System.IO.TextWriter"),
    _class("System.IO", "BinaryReader", "System.IDisposable"),
    _class("System.IO", "BinaryWriter", "System.IDisposable", "System.IAsyncDisposable"),
    _class("System.IO", "FileSystemWatcher", "System.ComponentModel.Component"),
    # System.Net
    _class("System.Net.Http", "HttpMessageInvoker", "System.IDisposable"),
    _class("System.Net.Http", "HttpClient", "System.Net.Http.HttpMessageInvoker"),
    _class("System.Net.Http", "HttpResponseMessage", "System.IDisposable"),
    _class("System.Net.Http", "HttpRequestMessage", "System.IDisposable"),
    _class("System.Net.Sockets", "Socket", "System.IDisposable"),
    _class("System.Net.Sockets", "TcpClient", "System.IDisposable"),
    # System.Threading
    _class("System.Threading", "Timer", "System.IDisposable", "System.IAsyncDisposable"),
    _class("System.Threading", "CancellationTokenSource", "System.IDisposable"),
    _class("System.Threading", "SemaphoreSlim", "System.IDisposable"),
    _class("System.Threading", "ManualResetEventSlim", "System.IDisposable"),
    _class("System.Threading", "ReaderWriterLockSlim", "System.IDisposable"),
    _class("System.Threading", "WaitHandle", "System.IDisposable"),
    _class("System.Threading", "EventWaitHandle", "System.Threading.WaitHandle"),
    _class("System.Threading", "ManualResetEvent", "System.Threading.EventWaitHandle"),
    _class("System.Threading", "AutoResetEvent", "System.Threading.EventWaitHandle"),
    _class("System.Threading", "Mutex", "System.Threading.WaitHandle"),
    _class("System.Timers", "Timer", "System.ComponentModel.Component"),
    # System.Diagnostics
    _class("System.Diagnostics", "Process", "System.ComponentModel.Component"),
    # System.Data
    _class("System.Data.Common", "DbConnection", "System.ComponentModel.Component", "System.IAsyncDisposable"),
    _class("System.Data.Common", "DbCommand", "System.ComponentModel.Component", "System.IAsyncDisposable"),
    _class("System.Data.Common", "DbDataReader", "System.IDisposable", "System.IAsyncDisposable"),
    # System.Security.Cryptography
    _class("System.Security.Cryptography", "HashAlgorithm", "System.IDisposable"),
    _class("System.Security.Cryptography", "SHA256", "System.Security.Cryptography.HashAlgorithm"),
    # Microsoft.Win32.SafeHandles / System.Runtime.InteropServices
    _class("System.Runtime.InteropServices", "SafeHandle", "System.IDisposable"),
    _class("Microsoft.Win32.SafeHandles", "SafeFileHandle", "System.Runtime.InteropServices.SafeHandle"),
)
