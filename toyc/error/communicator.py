import sys

from toyc.util import Colors, Span


# Class used to create messages, which can be communicated to the programmer
class Communicator:

    # Creates an appropriate message string from the given arguments
    @staticmethod
    def create_message(
        program: str,
        span: Span,
        class_name="CompilerError",
        before: str = "",
        after: str = "",
        n_before: int = 1,
        n_after: int = 1,
        color=Colors.RED,
    ) -> str:
        lines = program.splitlines()
        error_lines = lines[
            max(0, span.start_ln - n_before - 1) : max(0, span.end_ln + n_after)
        ]
        final_error_lines = []
        start_line_no = max(1, span.start_ln - n_before)
        end_line_no = start_line_no + len(error_lines) - 1
        for i, line in enumerate(error_lines, start=start_line_no):
            # Determine the number of spaces between e.g. '8.' and the code.
            # See the * in the following example:
            #    *8. int a;
            # -> *9. a = 5 / b;
            #    10. print a;
            padding = " " * (len(str(end_line_no)) - len(str(i)))
            final_line = ""
            # If this line contains denotated spans:
            if i >= span.start_ln and i <= span.end_ln:
                # First line
                if i == span.start_ln:
                    # Do not color outside of span on first line
                    final_line += f"-> {padding}{i}. {line[:span.start_col]}"

                    # If we have more than 1 line, color the remaining line
                    if span.multiline:
                        final_line += f"{color}{line[span.start_col:]}{Colors.ENDC}"
                    # If there is one line, color up until the correct col
                    else:
                        final_line += (
                            f"{color}{line[span.start_col:span.end_col]}{Colors.ENDC}"
                        )
                        final_line += line[span.end_col :]

                # Color lines (if any) that are in between the first and last line
                elif i > span.start_ln and i < span.end_ln:
                    final_line += f"-> {padding}{i}. {color}{line}{Colors.ENDC}"
                # The last line, of a multiline
                else:
                    final_line += (
                        f"-> {padding}{i}. {color}{line[:span.end_col]}{Colors.ENDC}"
                    )
                    final_line += line[span.end_col :]

            else:
                final_line += f"   {padding}{i}. {line}"
            final_error_lines.append(final_line)

        message = class_name + ": " + before
        if final_error_lines:
            message += "\n" + "\n".join(final_error_lines)
        if after:
            message += "\n" + after
        return message

    # Communicates all warnings and errors to the programmer
    # In case of any errors, the pipeline will stop with an exception
    @staticmethod
    def communicate(stage_of_exception) -> None:
        warnings = "".join(
            [str(warning) + "\n\n" for warning in WarningRaiser.WARNINGS[:10]]
        )
        if warnings:
            if len(WarningRaiser.WARNINGS) > 10:
                omitting_multiple_warnings = len(WarningRaiser.WARNINGS) - 10 > 1
                warnings += f"Showing 10 warnings, omitting {len(WarningRaiser.WARNINGS)-10} warning{'s' if omitting_multiple_warnings else ''}..."
            WarningRaiser.WARNINGS.clear()
            print("\n", warnings)

        errors = "".join(["\n\n" + str(error) for error in ErrorRaiser.ERRORS])
        if errors:
            ErrorRaiser.ERRORS.clear()
            raise stage_of_exception(errors)


# Used to store all the accumulated warnings
class WarningRaiser:
    WARNINGS = []


# Used to store the error that is about to be raised
class ErrorRaiser:
    ERRORS = []
