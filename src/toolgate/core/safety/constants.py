"""Static command lists and path pattern tables used by the classifier."""

from __future__ import annotations

import re

# Generally benign commands. `sed` is here for read-only transformations; the
# sed handler rejects in-place edits and audits output redirection.
ALLOWED_COMMANDS = frozenset(
    {
        "ls",
        "pwd",
        "grep",
        "rg",
        "cat",
        "echo",
        "head",
        "tail",
        "sed",
        "find",
        "wc",
        "git",
    }
)

BLOCKED_COMMANDS = frozenset(
    {
        # Filesystem
        "rm",
        "rmdir",
        "mkfs",
        "dd",
        "mv",
        "cp",
        # System
        "sudo",
        "su",
        "chmod",
        "chown",
        "shutdown",
        "reboot",
        # Network
        "curl",
        "wget",
        "ssh",
        "scp",
        "netstat",
        # Package managers
        "apt",
        "yum",
        "npm",
        "yarn",
        "pnpm",
        "pip",
        "gem",
        # Wrappers and process control
        "eval",
        "exec",
        "kill",
        "killall",
    }
)

# Redirect operators that write to their target
OUTPUT_REDIRECTS = frozenset({">", ">>", ">|", "&>", "&>>", ">&"})

# Redirect operators whose word is a delimiter or inline text, not a path
HEREDOC_REDIRECTS = frozenset({"<<", "<<-", "<<<"})

# --- Path analysis ---

SYSTEM_PATHS = ("/etc", "/dev", "/proc", "/var", "/usr", "/boot", "/bin")

SAFE_DEVICES = frozenset(
    {
        "/dev/null",
        "/dev/stdout",
        "/dev/stderr",
        "/dev/zero",
        "/dev/random",
        "/dev/urandom",
    }
)

SENSITIVE_EXTENSIONS = (".env", ".pem", ".key", ".p12", ".pfx")

# Credential stores that are never legitimate targets, wherever they appear
SENSITIVE_STORES = frozenset({".ssh", ".gnupg", ".aws", ".kube"})

# Dotfiles that matter when they sit below a home directory
SENSITIVE_HOME_ENTRIES = (
    "/.ssh",
    "/.gnupg",
    "/.aws",
    "/.kube",
    "/.env",
    "/.git",
    "/.config",
    "/.bash_history",
    "/.zsh_history",
)

HOME_PATTERNS = (
    re.compile(r"^~"),
    re.compile(r"^\$HOME"),
    re.compile(r"^\$\{HOME\}"),
    re.compile(r"^\$\{?USER\}?"),
    re.compile(r"^\$\{?LOGNAME\}?"),
    re.compile(r"^\$\{?XDG_"),
    re.compile(r"^/home/"),
    re.compile(r"^/Users/"),
    re.compile(r"^/root($|/)"),
)

# Strips the home prefix so the remainder can be checked for dotfiles
HOME_PREFIX = re.compile(
    r"^(~[^/]*"
    r"|\$\{?HOME\}?"
    r"|\$\{?USER\}?"
    r"|\$\{?LOGNAME\}?"
    r"|\$\{?XDG_[A-Z_]+\}?"
    r"|/home/[^/]+"
    r"|/Users/[^/]+"
    r"|/root)"
)

ABSOLUTE_HOME_DOTFILE = re.compile(r"^/(home|Users)/[^/]+/\.\w+")

# Common project configuration files
SAFE_JSON_FILES = frozenset(
    {
        "package.json",
        "package-lock.json",
        "tsconfig.json",
        "jsconfig.json",
        "eslint.config.json",
        ".eslintrc.json",
        "prettier.config.json",
        ".prettierrc.json",
        "jest.config.json",
        "babel.config.json",
        ".babelrc.json",
        "ava.config.json",
        "xo.config.json",
        "tslint.json",
        "renovate.json",
        "nx.json",
        "project.json",
        "vercel.json",
        "now.json",
        "composer.json",
    }
)

# Filenames that usually hold credentials, tokens or keys
SUSPICIOUS_JSON_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        # Credentials and secrets
        r"^secrets?\.json$",
        r"^secrets?[-_.].*\.json$",
        r"^credentials?\.json$",
        r"^credentials?[-_.].*\.json$",
        r"^tokens?\.json$",
        r"^tokens?[-_.].*\.json$",
        r"^auth\.json$",
        r"^auth[-_.].*\.json$",
        r"^api[-_]?keys?\.json$",
        r"^api[-_]?keys?[-_.].*\.json$",
        r"^service[-_]?accounts?\.json$",
        r"^service[-_]?accounts?[-_.].*\.json$",
        # Private keys
        r"^private\.json$",
        r"^private[-_.].*\.json$",
        r"^key\.json$",
        r"^key[-_.].*\.json$",
        r"^id_rsa.*\.json$",
        # Cloud providers
        r"^firebase[-_]?adminsdk.*\.json$",
        r"^google[-_]?credentials.*\.json$",
        r"^gcloud.*\.json$",
        r"^azure.*\.json$",
        r"^aws.*\.json$",
        r"^client[-_]secret.*\.json$",
        r"^oauth.*client.*\.json$",
        # SSO
        r"^okta.*\.json$",
        r"^sso.*\.json$",
        r"^saml.*\.json$",
        # Monitoring
        r"^sentry.*\.json$",
        r"^newrelic.*\.json$",
        r"^datadog.*\.json$",
        # Key storage
        r".*\.keystore\.json$",
        r".*\.keypair\.json$",
        r".*\.p8\.json$",
        r".*\.p12\.json$",
        # Secret management
        r"^vault.*\.json$",
    )
)

# --- git ---

READ_ONLY_GIT_COMMANDS = frozenset(
    {
        # Status and information
        "status",
        "log",
        "show",
        "diff",
        "reflog",
        # Inspection
        "ls-files",
        "ls-tree",
        "ls-remote",
        "describe",
        "rev-parse",
        "rev-list",
        "show-ref",
        "show-branch",
        "name-rev",
        # History
        "blame",
        "shortlog",
        "whatchanged",
        # Objects
        "cat-file",
        "count-objects",
        "verify-pack",
        "verify-commit",
        "verify-tag",
        # Other
        "grep",
        "help",
        "version",
        "fsck",
        "check-ignore",
        "check-attr",
        "check-ref-format",
    }
)

WRITE_GIT_COMMANDS = frozenset(
    {
        "push",
        "commit",
        "add",
        "rm",
        "mv",
        "reset",
        "clean",
        "rebase",
        "merge",
        "cherry-pick",
        "revert",
        "filter-branch",
        "filter-repo",
        "replace",
        "checkout",
        "switch",
        "restore",
        "branch",
        "tag",
        "config",
        "remote",
        "submodule",
        "subtree",
        "stash",
        "apply",
        "fetch",
        "pull",
        "clone",
        "init",
        "gc",
        "prune",
        "worktree",
    }
)

GIT_DANGEROUS_FLAG_PREFIXES = ("--force", "-f", "--hard", "--delete", "-d", "-D")

# --- find ---

FIND_EXEC_FLAGS = frozenset({"-exec", "-execdir", "-ok", "-okdir"})

FIND_EXEC_TERMINATORS = frozenset({";", "+", "\\;", "\\+"})

FIND_PATTERN_FLAGS = frozenset(
    {
        "-name",
        "-iname",
        "-path",
        "-ipath",
        "-regex",
        "-iregex",
        "-wholename",
        "-iwholename",
    }
)

FIND_FILE_OUTPUT_FLAGS = ("-fprint", "-fprint0", "-fprintf", "-fls")

FIND_SYMLINK_FLAGS = frozenset({"-L", "-follow", "-H"})

FIND_DESTRUCTIVE_PROGRAMS = frozenset(
    {
        "rm",
        "shred",
        "chmod",
        "chown",
        "mv",
        "dd",
        "mkfs",
        "truncate",
        "tee",
        "cp",
        "ln",
        "install",
        "rsync",
    }
)

# Programs that can run arbitrary code or spawn another process
FIND_SPAWNING_PROGRAMS = frozenset(
    {
        # Shells
        "sh",
        "bash",
        "zsh",
        "ksh",
        "dash",
        "fish",
        "tcsh",
        "csh",
        # Script interpreters
        "perl",
        "python",
        "python2",
        "python3",
        "ruby",
        "node",
        "nodejs",
        "php",
        "lua",
        # Meta-executors
        "env",
        "xargs",
        "parallel",
        "nohup",
        "nice",
        "ionice",
        "timeout",
        "stdbuf",
        "script",
        "expect",
        # Text processors that can execute
        "awk",
        "gawk",
        "mawk",
        "nawk",
        "sed",
        "ed",
        # Editors with shell escapes
        "vim",
        "nvim",
        "emacs",
    }
)

SHELL_METACHARACTERS = re.compile(r"[|&;$`<>]")

FIND_SUID_NUMERIC = re.compile(r"[-/]?[2467]000")
FIND_SUID_SYMBOLIC = re.compile(r"[ug]?\+s")

FIND_GLOB_CHARACTERS = re.compile(r"[*?\[\]]")

# --- sed ---

SED_SCRIPT_FLAGS = frozenset({"-e", "--expression"})
SED_SCRIPT_FILE_FLAGS = frozenset({"-f", "--file"})
