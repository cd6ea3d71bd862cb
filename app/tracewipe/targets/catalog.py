"""Well-known history and log locations.

Per-user entries are relative to a home directory. System entries are
absolute. Paths that do not exist on a given host are harmless: the
erasure engine reports them as missing.
"""

# Shell, REPL, editor and database client history files (relative to home)
USER_HISTORY_FILES: tuple[str, ...] = (
    # Shells
    ".bash_history",
    ".zsh_history",
    ".zhistory",
    ".histfile",
    ".sh_history",
    ".ksh_history",
    ".local/share/fish/fish_history",
    ".config/fish/fish_history",
    # Language REPLs
    ".python_history",
    ".ipython/profile_default/history.sqlite",
    ".node_repl_history",
    ".ts_node_repl_history",
    ".irb_history",
    ".pry_history",
    ".php_history",
    ".scala_history",
    ".guile_history",
    ".Rhistory",
    ".octave_hist",
    ".julia/logs/repl_history.jl",
    ".calc_history",
    # Database clients
    ".mysql_history",
    ".psql_history",
    ".sqlite_history",
    ".rediscli_history",
    ".dbshell",
    ".mongosh/mongosh_repl_history",
    # Pagers, editors and tools
    ".lesshst",
    ".viminfo",
    ".local/state/nvim/shada/main.shada",
    ".local/share/nano/search_history",
    ".nano_history",
    ".wget-hsts",
    ".lftp/rl_history",
    ".local/share/lftp/rl_history",
    ".gdb_history",
    ".local/share/recently-used.xbel",
)

# Session artifact directories (relative to home), removed recursively
USER_SESSION_DIRS: tuple[str, ...] = (
    ".bash_sessions",
    ".zsh_sessions",
)

# Login records and system logs
SYSTEM_LOG_FILES: tuple[str, ...] = (
    "/var/log/wtmp",
    "/var/log/btmp",
    "/var/log/lastlog",
    "/var/log/faillog",
    "/var/log/auth.log",
    "/var/log/secure",
    "/var/log/syslog",
    "/var/log/messages",
    "/var/log/kern.log",
    "/var/log/daemon.log",
    "/var/log/user.log",
    "/var/log/sudo.log",
    "/var/log/dpkg.log",
    "/var/log/apt/history.log",
    "/var/log/apt/term.log",
    "/var/log/audit/audit.log",
    "/var/run/utmp",
)

# Home directory of the superuser, which the password database may list
# under a nonstandard shell
ROOT_HOME = "/root"
